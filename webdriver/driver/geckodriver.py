"""
geckodriver command line.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from webdriver.driver.ports import validate_port
from webdriver.driver.process import DriverProcess, look_path


class GeckoLogLevel(str, Enum):
    FATAL = "fatal"
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    CONFIG = "config"
    DEBUG = "debug"
    TRACE = "trace"


@dataclass
class GeckoDriverArgs:
    """
    Validated geckodriver flags.

    ``binary`` names the Firefox executable and is resolved through PATH.
    """

    port: int
    host: str | None = None
    marionette_host: str | None = None
    marionette_port: int | None = None
    binary: str | None = None
    log_level: GeckoLogLevel | str | None = None
    connect_existing: bool = False
    jsdebugger: bool = False
    verbose: bool = False
    show_version: bool = False

    def __post_init__(self):
        validate_port(self.port)
        if self.marionette_port is not None:
            validate_port(self.marionette_port)
        if self.log_level is not None:
            try:
                self.log_level = GeckoLogLevel(self.log_level)
            except ValueError as e:
                raise ValueError(f"unknown log level {self.log_level}") from e
        if self.binary:
            self.binary = look_path(self.binary)

    def build(self) -> list[str]:
        args = [f"--port={self.port}"]
        if self.host:
            args.append(f"--host={self.host}")
        if self.marionette_host:
            args.append(f"--marionette-host={self.marionette_host}")
        if self.marionette_port is not None:
            args.append(f"--marionette-port={self.marionette_port}")
        if self.binary:
            args.append(f"--binary={self.binary}")
        if self.log_level is not None:
            args.append(f"--log={GeckoLogLevel(self.log_level).value}")
        for enabled, flag in (
            (self.connect_existing, "--connect-existing"),
            (self.jsdebugger, "--jsdebugger"),
            (self.verbose, "-v"),
            (self.show_version, "-V"),
        ):
            if enabled:
                args.append(flag)
        return args


class GeckoDriver(DriverProcess):
    def __init__(self, args: GeckoDriverArgs, binary: str = "geckodriver", **kwargs: Any):
        super().__init__(binary, args.build(), **kwargs)
        self.port = args.port
