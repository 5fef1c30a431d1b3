"""
Supervisor for a driver executable (chromedriver, geckodriver, ...).

``DriverProcess.run`` blocks for the lifetime of the child and is meant to be
called from a dedicated thread; ``stop`` may be called from any thread.
"""

from __future__ import annotations

import codecs
import io
import os
import shutil
import signal
import subprocess
import threading
from collections.abc import Callable, Sequence
from typing import IO, Any

from webdriver.errors import WebDriverError
from webdriver.logger import WebDriverLogger, get_logger

Hook = Callable[[int], None]

RUN_HOOK_DELAY = 1.0
_POLL_INTERVAL = 0.1
_CHUNK_SIZE = 4096


class DriverNotFoundError(WebDriverError, FileNotFoundError):
    """The driver executable could not be found on PATH."""

    def __init__(self, binary: str):
        super().__init__(f"executable file not found in $PATH: {binary}")
        self.binary = binary


class DriverAlreadyRunningError(WebDriverError):
    def __init__(self, pid: int):
        super().__init__(f"driver is already running (pid {pid})")
        self.pid = pid


class DriverExitError(WebDriverError):
    """The driver exited on its own with a non-zero status."""

    def __init__(self, returncode: int):
        super().__init__(f"driver exited with status {returncode}")
        self.returncode = returncode


def look_path(binary: str) -> str:
    path = shutil.which(binary)
    if path is None:
        raise DriverNotFoundError(binary)
    return path


def _pump(source: IO[bytes], sink: IO[Any]) -> None:
    decoder = None
    if isinstance(sink, io.TextIOBase):
        decoder = codecs.getincrementaldecoder("utf-8")("replace")
    with source:
        for chunk in iter(lambda: source.read1(_CHUNK_SIZE), b""):
            sink.write(decoder.decode(chunk) if decoder else chunk)
            sink.flush()
        if decoder:
            sink.write(decoder.decode(b"", final=True))
            sink.flush()


class DriverProcess:
    """
    Run a driver executable and report its lifecycle through hooks.

    Args:
        binary: Executable name or path, resolved through PATH
        args: Command-line arguments
        stdout: Optional sink (text or binary file object) for the child's stdout
        stderr: Optional sink for the child's stderr
        run_hook: Called with the pid about one second after the child started
        stop_hook: Called with the pid after the child exited
        logger: Optional logger

    Raises:
        DriverNotFoundError: If ``binary`` cannot be resolved

    Example:
        >>> proc = DriverProcess("chromedriver", ["--port=9515"], run_hook=lambda pid: ready.set())
        >>> threading.Thread(target=proc.run, daemon=True).start()
        >>> ...
        >>> proc.stop()
    """

    def __init__(
        self,
        binary: str,
        args: Sequence[str] | None = None,
        *,
        stdout: IO[Any] | None = None,
        stderr: IO[Any] | None = None,
        run_hook: Hook | None = None,
        stop_hook: Hook | None = None,
        logger: WebDriverLogger | None = None,
    ):
        self.binary = look_path(binary)
        self._args = list(args or [])
        self.stdout = stdout
        self.stderr = stderr
        self.run_hook = run_hook
        self.stop_hook = stop_hook
        self.logger = logger or get_logger("driver")

        self._lock = threading.Lock()
        self._proc: subprocess.Popen | None = None
        self._stopping = False

    @property
    def args(self) -> list[str]:
        with self._lock:
            return list(self._args)

    @property
    def pid(self) -> int | None:
        with self._lock:
            return self._proc.pid if self._proc is not None else None

    @property
    def running(self) -> bool:
        with self._lock:
            return self._proc is not None

    def run(self, cancel: threading.Event | None = None) -> None:
        """
        Start the driver and block until it exits.

        Args:
            cancel: When set, the child is killed and ``run`` returns

        Raises:
            DriverAlreadyRunningError: If this supervisor already runs a child
            DriverExitError: If the child exited with a non-zero status
            OSError: If the child could not be started
        """
        with self._lock:
            if self._proc is not None:
                raise DriverAlreadyRunningError(self._proc.pid)
            proc = subprocess.Popen(
                [self.binary, *self._args],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE if self.stdout is not None else subprocess.DEVNULL,
                stderr=subprocess.PIPE if self.stderr is not None else subprocess.DEVNULL,
            )
            self._proc = proc
            self._stopping = False

        self.logger.info(f"driver started pid={proc.pid} argv={[self.binary, *self._args]}")
        pumps = [
            threading.Thread(target=_pump, args=(pipe, sink), daemon=True)
            for pipe, sink in ((proc.stdout, self.stdout), (proc.stderr, self.stderr))
            if pipe is not None and sink is not None
        ]
        for t in pumps:
            t.start()

        timer: threading.Timer | None = None
        if self.run_hook is not None:
            timer = threading.Timer(RUN_HOOK_DELAY, self.run_hook, args=(proc.pid,))
            timer.daemon = True
            timer.start()

        try:
            returncode = self._wait(proc, cancel)
        finally:
            if timer is not None:
                timer.cancel()
            for t in pumps:
                t.join()
            with self._lock:
                self._proc = None
                stopped = self._stopping

        self.logger.info(f"driver exited pid={proc.pid} status={returncode}")
        if self.stop_hook is not None:
            self.stop_hook(proc.pid)

        # negative returncode: killed by a signal
        if returncode > 0 and not stopped:
            raise DriverExitError(returncode)

    @staticmethod
    def _wait(proc: subprocess.Popen, cancel: threading.Event | None) -> int:
        if cancel is None:
            return proc.wait()
        while True:
            try:
                return proc.wait(timeout=_POLL_INTERVAL)
            except subprocess.TimeoutExpired:
                if cancel.is_set():
                    proc.kill()
                    return proc.wait()

    def stop(self) -> None:
        """Interrupt the running child. Does nothing when no child is running."""
        with self._lock:
            if self._proc is None:
                return
            self._stopping = True
            if os.name == "nt":
                self._proc.terminate()
            else:
                self._proc.send_signal(signal.SIGINT)
