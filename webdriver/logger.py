"""
Logging hooks for the WebDriver client.

Components accept any object with ``debug``/``info``/``warning``/``error``
methods. Without one they log through the stdlib ``webdriver`` logger and
leave handler configuration to the application.
"""

import logging
from typing import Protocol

ROOT_LOGGER_NAME = "webdriver"


class WebDriverLogger(Protocol):
    """Protocol for optional logger interface."""

    def debug(self, message: str) -> None:
        """Log debug message."""
        ...

    def info(self, message: str) -> None:
        """Log info message."""
        ...

    def warning(self, message: str) -> None:
        """Log warning message."""
        ...

    def error(self, message: str) -> None:
        """Log error message."""
        ...


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or a child of it when ``name`` is given."""
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
