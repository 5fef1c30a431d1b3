"""
Runtime configuration read from constructor arguments or the environment.

Environment variables:
    CHROMEDRIVER_PATH       chromedriver binary (default: ``chromedriver`` on PATH)
    GECKODRIVER_PATH        geckodriver binary (default: ``geckodriver`` on PATH)
    WEBDRIVER_HTTP_TIMEOUT  per-request timeout in seconds (default 15)
    WEBDRIVER_RETRY_COUNT   retries for failed requests (default 3)
    WEBDRIVER_BACKOFF       delay between retries in seconds (default 5)
"""

import os
from dataclasses import dataclass

ENV_CHROMEDRIVER_PATH = "CHROMEDRIVER_PATH"
ENV_GECKODRIVER_PATH = "GECKODRIVER_PATH"
ENV_HTTP_TIMEOUT = "WEBDRIVER_HTTP_TIMEOUT"
ENV_RETRY_COUNT = "WEBDRIVER_RETRY_COUNT"
ENV_BACKOFF = "WEBDRIVER_BACKOFF"


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


@dataclass
class ClientConfig:
    """HTTP settings used when the browser facade builds its own client."""

    timeout: float = 15.0
    retry_count: int = 3
    backoff: float = 5.0

    @classmethod
    def from_env(cls) -> "ClientConfig":
        defaults = cls()
        return cls(
            timeout=_env_float(ENV_HTTP_TIMEOUT, defaults.timeout),
            retry_count=_env_int(ENV_RETRY_COUNT, defaults.retry_count),
            backoff=_env_float(ENV_BACKOFF, defaults.backoff),
        )


@dataclass
class DriverConfig:
    """Locations of the driver binaries."""

    chromedriver_path: str = "chromedriver"
    geckodriver_path: str = "geckodriver"

    @classmethod
    def from_env(cls) -> "DriverConfig":
        return cls(
            chromedriver_path=os.environ.get(ENV_CHROMEDRIVER_PATH) or "chromedriver",
            geckodriver_path=os.environ.get(ENV_GECKODRIVER_PATH) or "geckodriver",
        )
