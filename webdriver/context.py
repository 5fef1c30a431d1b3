"""
Browsing context commands: windows, frames and window geometry.
"""

from webdriver.commands import (
    CommandSurface,
    decode_json,
    decode_list,
    decode_object,
    expect_success,
)
from webdriver.errors import InvalidResponseError, UnknownWindowTypeError
from webdriver.models import Rect, Window, WindowType
from webdriver.transport import DELETE, GET, POST, Response


def _handle(resp: Response) -> str:
    value = decode_json(resp)
    if not isinstance(value, str):
        raise InvalidResponseError(f"expected window handle, got {resp.value!r}")
    return value


def _handles(resp: Response) -> list[str]:
    values = decode_list(resp)
    if not all(isinstance(v, str) for v in values):
        raise InvalidResponseError(f"expected window handles, got {resp.value!r}")
    return values


def _rect(resp: Response) -> Rect:
    return Rect.model_validate(decode_object(resp))


def _window(resp: Response) -> Window:
    return Window.model_validate(decode_object(resp))


def validate_window_type(window_type: WindowType | str) -> str:
    """
    Check a window type before it is sent.

    Raises:
        UnknownWindowTypeError: If the type is neither "tab" nor "window"
    """
    try:
        return WindowType(window_type).value
    except ValueError as e:
        raise UnknownWindowTypeError(str(window_type)) from e


class Context(CommandSurface):
    """Window and frame handling for a session."""

    def get_window_handle(self):
        return self._call(GET, "/window", None, _handle)

    def get_window_handles(self):
        return self._call(GET, "/window/handles", None, _handles)

    def new_window(self, window_type: WindowType | str):
        """Open a new tab or window. The type is validated before any request is sent."""
        wt = validate_window_type(window_type)
        return self._call(POST, "/window/new", {"type": wt}, _window)

    def close_window(self):
        """Close the current window and return the handles still open."""
        return self._call(DELETE, "/window", None, _handles)

    def switch_to_window(self, handle: str):
        return self._call(POST, "/window", {"handle": handle}, expect_success)

    def switch_to_frame(self, frame):
        """Switch to a frame by handle, index, element reference or None (top level)."""
        return self._call(POST, "/frame", {"id": frame}, expect_success)

    def switch_to_parent_frame(self):
        return self._call(POST, "/frame/parent", None, expect_success)

    def get_rect(self):
        return self._call(GET, "/window/rect", None, _rect)

    def set_rect(self, rect: Rect):
        params = {"width": rect.width, "height": rect.height, "x": rect.x, "y": rect.y}
        return self._call(POST, "/window/rect", params, _rect)

    def maximize(self):
        return self._call(POST, "/window/maximize", None, _rect)

    def minimize(self):
        return self._call(POST, "/window/minimize", None, _rect)

    def fullscreen(self):
        return self._call(POST, "/window/fullscreen", None, _rect)
