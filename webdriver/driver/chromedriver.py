"""
chromedriver command line.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from webdriver.driver.ports import validate_port
from webdriver.driver.process import DriverProcess


class ChromeLogLevel(str, Enum):
    ALL = "ALL"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    SEVERE = "SEVERE"
    OFF = "OFF"


def _log_level(level: ChromeLogLevel | str) -> ChromeLogLevel:
    try:
        return ChromeLogLevel(level)
    except ValueError as e:
        raise ValueError(f"unknown log level {level}") from e


def create_file_if_not_exist(path: str | Path) -> None:
    """Create an empty file at ``path`` unless it exists. Raises OSError if it cannot."""
    p = Path(path)
    if not p.exists():
        p.touch()


@dataclass
class ChromeDriverArgs:
    """
    Validated chromedriver flags.

    Ports are checked and the log file is created when the object is built, so
    invalid settings fail before any process is spawned.
    """

    port: int
    adb_port: int | None = None
    log_level: ChromeLogLevel | str | None = None
    log_path: str | None = None
    base_url: str | None = None
    whitelisted_ips: list[str] = field(default_factory=list)
    append_log: bool = False
    readable_timestamp: bool = False
    replayable: bool = False
    silent: bool = False
    verbose: bool = False
    show_version: bool = False

    def __post_init__(self):
        validate_port(self.port)
        if self.adb_port is not None:
            validate_port(self.adb_port)
        if self.log_level is not None:
            self.log_level = _log_level(self.log_level)
        if self.log_path:
            create_file_if_not_exist(self.log_path)

    def build(self) -> list[str]:
        args = [f"--port={self.port}"]
        if self.adb_port is not None:
            args.append(f"--adb-port={self.adb_port}")
        if self.log_level is not None:
            args.append(f"--log-level={ChromeLogLevel(self.log_level).value}")
        if self.log_path:
            args.append(f"--log-path={self.log_path}")
        if self.base_url:
            args.append(f"--url-base={self.base_url}")
        if self.whitelisted_ips:
            args.append(f"--whitelisted-ips={','.join(self.whitelisted_ips)}")
        for enabled, flag in (
            (self.append_log, "--append-log"),
            (self.readable_timestamp, "--readable-timestamp"),
            (self.replayable, "--replayable"),
            (self.silent, "--silent"),
            (self.verbose, "--verbose"),
            (self.show_version, "--version"),
        ):
            if enabled:
                args.append(flag)
        return args


class ChromeDriver(DriverProcess):
    """
    chromedriver supervisor.

    Example:
        >>> driver = ChromeDriver(ChromeDriverArgs(port=9515, log_level="SEVERE"))
        >>> driver.args
        ['--port=9515', '--log-level=SEVERE']
    """

    def __init__(self, args: ChromeDriverArgs, binary: str = "chromedriver", **kwargs: Any):
        super().__init__(binary, args.build(), **kwargs)
        self.port = args.port
