"""
W3C WebDriver client - drive Chrome, Firefox or any remote end over HTTP
"""

from .browser import Browser, chrome, firefox, remote
from .capabilities import Capabilities, Platform
from .config import ClientConfig, DriverConfig
from .elements import ELEMENT_KEY, By, WebElement
from .errors import (
    EmptyResponseError,
    InvalidArgumentsError,
    InvalidCookieError,
    InvalidResponseError,
    MalformedResponseError,
    NoSuchElementError,
    ProtocolError,
    ResponseWithoutBodyError,
    TimeoutConfigurationError,
    UnknownSessionError,
    UnknownWindowHandlerError,
    UnknownWindowTypeError,
    WebDriverError,
)
from .httpclient import AsyncHttpClient, HttpClient
from .keys import Key
from .logger import WebDriverLogger, get_logger

# Wire models
from .models import Cookie, Proxy, ProxyType, Rect, Status, Timeout, Window, WindowType
from .options import BrowserOptions, ChromeOptions, FirefoxOptions, InvalidExtensionError
from .session import Session
from .transport import AsyncHttpTransport, HttpTransport, Response, Transport

__version__ = "0.1.0"

__all__ = [
    # Facade
    "Browser",
    "chrome",
    "firefox",
    "remote",
    # Session and transports
    "Session",
    "Transport",
    "HttpTransport",
    "AsyncHttpTransport",
    "Response",
    "HttpClient",
    "AsyncHttpClient",
    # Options
    "Capabilities",
    "Platform",
    "BrowserOptions",
    "ChromeOptions",
    "FirefoxOptions",
    "InvalidExtensionError",
    # Elements
    "By",
    "ELEMENT_KEY",
    "Key",
    "WebElement",
    # Models
    "Cookie",
    "Proxy",
    "ProxyType",
    "Rect",
    "Status",
    "Timeout",
    "Window",
    "WindowType",
    # Errors
    "WebDriverError",
    "ProtocolError",
    "InvalidResponseError",
    "InvalidArgumentsError",
    "UnknownWindowTypeError",
    "UnknownWindowHandlerError",
    "NoSuchElementError",
    "EmptyResponseError",
    "ResponseWithoutBodyError",
    "MalformedResponseError",
    "UnknownSessionError",
    "InvalidCookieError",
    "TimeoutConfigurationError",
    # Config and logging
    "ClientConfig",
    "DriverConfig",
    "WebDriverLogger",
    "get_logger",
]
