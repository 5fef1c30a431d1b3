"""
Error model for the WebDriver client.

A remote end answers failures in one of two dialects: the legacy JSON-Wire
protocol (numeric ``status`` plus a message) or W3C (``value`` carrying
``error``/``message``/``stacktrace``/``data``). ``ProtocolError.from_response``
folds both into a single exception type.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from webdriver.transport import Response


# Legacy JSON-Wire status codes
STATUS_SUCCESS = 0
STATUS_NO_SUCH_DRIVER = 6
STATUS_NO_SUCH_ELEMENT = 7
STATUS_NO_SUCH_FRAME = 8
STATUS_UNKNOWN_COMMAND = 9
STATUS_STALE_ELEMENT_REFERENCE = 10
STATUS_ELEMENT_NOT_VISIBLE = 11
STATUS_INVALID_ELEMENT_STATE = 12
STATUS_UNKNOWN_ERROR = 13
STATUS_ELEMENT_IS_NOT_SELECTABLE = 15
STATUS_JAVASCRIPT_ERROR = 17
STATUS_XPATH_LOOKUP_ERROR = 19
STATUS_TIMEOUT = 21
STATUS_NO_SUCH_WINDOW = 23
STATUS_INVALID_COOKIE_DOMAIN = 24
STATUS_UNABLE_TO_SET_COOKIE = 25
STATUS_UNEXPECTED_ALERT_OPEN = 26
STATUS_NO_ALERT_OPEN_ERROR = 27
STATUS_SCRIPT_TIMEOUT = 28
STATUS_INVALID_ELEMENT_COORDINATES = 29
STATUS_IME_NOT_AVAILABLE = 30
STATUS_IME_ENGINE_ACTIVATION_FAILED = 31
STATUS_INVALID_SELECTOR = 32
STATUS_SESSION_NOT_CREATED_EXCEPTION = 33
STATUS_MOVE_TARGET_OUT_OF_BOUNDS = 34

LEGACY_STATUS_TEXT: dict[int, str] = {
    STATUS_SUCCESS: "The command executed successfully.",
    STATUS_NO_SUCH_DRIVER: "A session is either terminated or not started.",
    STATUS_NO_SUCH_ELEMENT: (
        "An element could not be located on the page using the given search parameters."
    ),
    STATUS_NO_SUCH_FRAME: (
        "A request to switch to a frame could not be satisfied because the frame could not be found."
    ),
    STATUS_UNKNOWN_COMMAND: (
        "The requested resource could not be found, or a request was received using an HTTP "
        "method that is not supported by the mapped resource."
    ),
    STATUS_STALE_ELEMENT_REFERENCE: (
        "An element command failed because the referenced element is no longer attached to the DOM."
    ),
    STATUS_ELEMENT_NOT_VISIBLE: (
        "An element command could not be completed because the element is not visible on the page."
    ),
    STATUS_INVALID_ELEMENT_STATE: (
        "An element command could not be completed because the element is in an invalid state "
        "(e.g. attempting to click a disabled element)."
    ),
    STATUS_UNKNOWN_ERROR: "An unknown server-side error occurred while processing the command.",
    STATUS_ELEMENT_IS_NOT_SELECTABLE: (
        "An attempt was made to select an element that cannot be selected."
    ),
    STATUS_JAVASCRIPT_ERROR: "An error occurred while executing user supplied JavaScript.",
    STATUS_XPATH_LOOKUP_ERROR: "An error occurred while searching for an element by XPath.",
    STATUS_TIMEOUT: "An operation did not complete before its timeout expired.",
    STATUS_NO_SUCH_WINDOW: (
        "A request to switch to a different window could not be satisfied because the window "
        "could not be found."
    ),
    STATUS_INVALID_COOKIE_DOMAIN: (
        "An illegal attempt was made to set a cookie under a different domain than the current page."
    ),
    STATUS_UNABLE_TO_SET_COOKIE: "A request to set a cookie's value could not be satisfied.",
    STATUS_UNEXPECTED_ALERT_OPEN: "A modal dialog was open, blocking this operation.",
    STATUS_NO_ALERT_OPEN_ERROR: (
        "An attempt was made to operate on a modal dialog when one was not open."
    ),
    STATUS_SCRIPT_TIMEOUT: "A script did not complete before its timeout expired.",
    STATUS_INVALID_ELEMENT_COORDINATES: (
        "The coordinates provided to an interactions operation are invalid."
    ),
    STATUS_IME_NOT_AVAILABLE: "IME was not available.",
    STATUS_IME_ENGINE_ACTIVATION_FAILED: "An IME engine could not be started.",
    STATUS_INVALID_SELECTOR: "Argument was an invalid selector (e.g. XPath/CSS).",
    STATUS_SESSION_NOT_CREATED_EXCEPTION: "A new session could not be created.",
    STATUS_MOVE_TARGET_OUT_OF_BOUNDS: "Target provided for a move action is out of bounds.",
}

HTTP_MISSING_COMMAND_PARAMETERS = "400: Missing Command Parameters"
HTTP_UNKNOWN_COMMAND = "404: Unknown command/Resource Not Found"
HTTP_INVALID_COMMAND_METHOD = "405: Invalid Command Method"
HTTP_FAILED_COMMAND = "500: Failed Command"
HTTP_UNIMPLEMENTED_COMMAND = "501: Unimplemented Command"

_HTTP_STATUS_CODE = {
    200: HTTP_MISSING_COMMAND_PARAMETERS,
    400: HTTP_MISSING_COMMAND_PARAMETERS,
    404: HTTP_UNKNOWN_COMMAND,
    405: HTTP_INVALID_COMMAND_METHOD,
    500: HTTP_FAILED_COMMAND,
    501: HTTP_UNIMPLEMENTED_COMMAND,
}


def http_status_code(http_status: int) -> str:
    """Map an HTTP status to the code string used when the remote end sent none."""
    return _HTTP_STATUS_CODE.get(http_status, "")


def legacy_status_text(status: int) -> str | None:
    """Return the JSON-Wire description for a legacy status, or None if unknown."""
    return LEGACY_STATUS_TEXT.get(status)


class WebDriverError(Exception):
    """Base class for every error raised by this package."""


class InvalidResponseError(WebDriverError):
    """The remote end answered with a value of an unexpected shape."""

    def __init__(self, message: str = "invalid response"):
        super().__init__(message)


class InvalidArgumentsError(WebDriverError, ValueError):
    """A command was called with arguments it cannot send."""

    def __init__(self, message: str = "invalid arguments"):
        super().__init__(message)


class UnknownWindowTypeError(InvalidArgumentsError):
    """Window type is neither 'tab' nor 'window'."""

    def __init__(self, window_type: str = ""):
        super().__init__(f"unknown window type {window_type!r}")
        self.window_type = window_type


class UnknownWindowHandlerError(WebDriverError):
    def __init__(self, message: str = "unknown window handler"):
        super().__init__(message)


class NoSuchElementError(WebDriverError):
    def __init__(self, message: str = "no such element"):
        super().__init__(message)


class EmptyResponseError(WebDriverError):
    def __init__(self, message: str = "empty response"):
        super().__init__(message)


class ResponseWithoutBodyError(WebDriverError):
    def __init__(self, message: str = "response without body"):
        super().__init__(message)


class MalformedResponseError(WebDriverError):
    """Body was present but is not a JSON object."""

    def __init__(self, message: str = "malformed response body"):
        super().__init__(message)


class UnknownSessionError(WebDriverError):
    def __init__(self, message: str = "unknown session"):
        super().__init__(message)


class InvalidCookieError(WebDriverError, ValueError):
    """Cookie is missing its name or value."""

    def __init__(self, message: str = "invalid cookie"):
        super().__init__(message)


class TimeoutConfigurationError(WebDriverError, ValueError):
    """Unknown timeout field."""

    def __init__(self, field: str = ""):
        super().__init__(f"timeout configuration error: unknown field {field!r}")
        self.field = field


class ProtocolError(WebDriverError):
    """
    Error reported by the remote end.

    Attributes:
        code: W3C error code (e.g. "no such element") or an HTTP-derived fallback
        message: Human readable message
        stacktrace: Remote stacktrace, if any
        data: Extra vendor data, if any
    """

    def __init__(
        self,
        code: str = "",
        message: str = "",
        stacktrace: str = "",
        data: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.stacktrace = stacktrace
        self.data = data if data is not None else {}
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"ErrorCode:{self.code}, Message:{self.message}"

    def __repr__(self) -> str:
        return f"ProtocolError(code={self.code!r}, message={self.message!r})"

    @property
    def stacktrace_lines(self) -> list[str]:
        return [line for line in self.stacktrace.splitlines() if line.strip()]

    @classmethod
    def from_response(cls, http_status: int, response: Response) -> ProtocolError:
        """
        Build an error from a failed response in either dialect.

        Args:
            http_status: HTTP status code of the reply
            response: Parsed response envelope

        Returns:
            ProtocolError with code and message filled in
        """
        fields = _decode_error_object(response.value)
        if fields is None:
            return cls(code=http_status_code(http_status), message=response.value)

        err = cls(**fields)
        is_null = response.value == "null"

        if response.status > 0 and is_null:
            err.code = http_status_code(http_status)
            text = legacy_status_text(response.status)
            if text is not None:
                err.message = text
        elif response.status > 0:
            if not err.code:
                err.code = http_status_code(http_status)
            if not err.message:
                err.message = err.code
                text = legacy_status_text(response.status)
                if text is not None:
                    err.message = text
        elif is_null:
            err.code = http_status_code(http_status)
            err.message = err.code
        elif not err.code:
            err.code = http_status_code(http_status)

        # args were computed from the initial fields
        err.args = (str(err),)
        return err


def _decode_error_object(raw: str) -> dict[str, Any] | None:
    """Decode the W3C error object, or None when ``raw`` does not hold one."""
    if not raw:
        return None
    try:
        decoded = json.loads(raw)
    except ValueError:
        return None

    if decoded is None:
        return {}
    if not isinstance(decoded, dict):
        return None

    fields: dict[str, Any] = {}
    for wire_name, attr in (("error", "code"), ("message", "message"), ("stacktrace", "stacktrace")):
        item = decoded.get(wire_name)
        if item is None:
            continue
        if not isinstance(item, str):
            return None
        fields[attr] = item

    data = decoded.get("data")
    if data is not None:
        if not isinstance(data, dict):
            return None
        fields["data"] = data
    return fields


def is_invalid_response(exc: BaseException) -> bool:
    return isinstance(exc, InvalidResponseError)


def is_invalid_arguments(exc: BaseException) -> bool:
    return isinstance(exc, InvalidArgumentsError)


def is_unknown_window_handler(exc: BaseException) -> bool:
    return isinstance(exc, UnknownWindowHandlerError)


def is_no_such_element(exc: BaseException) -> bool:
    return isinstance(exc, NoSuchElementError)


def is_empty_response(exc: BaseException) -> bool:
    return isinstance(exc, EmptyResponseError)


def is_response_without_body(exc: BaseException) -> bool:
    return isinstance(exc, ResponseWithoutBodyError)


def is_unknown_session(exc: BaseException) -> bool:
    return isinstance(exc, UnknownSessionError)


def is_invalid_cookie(exc: BaseException) -> bool:
    return isinstance(exc, InvalidCookieError)


def is_timeout_configuration(exc: BaseException) -> bool:
    return isinstance(exc, TimeoutConfigurationError)
