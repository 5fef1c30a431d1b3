"""
Element lookup and interaction.

Elements found through a session carry that session's id and transport; they
never hold a reference back to the ``Session`` object.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from webdriver.commands import (
    CommandSurface,
    decode_bool,
    decode_list,
    decode_object,
    expect_success,
    raw_string,
)
from webdriver.errors import InvalidArgumentsError, InvalidResponseError, NoSuchElementError
from webdriver.models import Rect
from webdriver.screen_capture import decode_screenshot
from webdriver.transport import GET, POST, Response, Transport

ELEMENT_KEY = "element-6066-11e4-a52e-4f735466cecf"


class By(str, Enum):
    """Element location strategies."""

    ID = "id"
    XPATH = "xpath"
    LINK_TEXT = "link text"
    PARTIAL_LINK_TEXT = "partial link text"
    NAME = "name"
    TAG_NAME = "tag name"
    CLASS_NAME = "class name"
    CSS_SELECTOR = "css selector"


def _locator(by: By | str, value: str) -> dict[str, str]:
    if not value:
        raise InvalidArgumentsError("empty locator value")
    return {"using": By(by).value, "value": value}


def element_id(reference: Any) -> str:
    """
    Extract the element id from a web element reference.

    Raises:
        NoSuchElementError: If the reference key is missing
    """
    if not isinstance(reference, dict):
        raise InvalidResponseError(f"expected element reference, got {reference!r}")
    eid = reference.get(ELEMENT_KEY)
    if not isinstance(eid, str):
        raise NoSuchElementError()
    return eid


class _Finder(CommandSurface):
    """Builds ``WebElement`` objects from lookup replies."""

    def _one(self, resp: Response) -> WebElement:
        return WebElement(element_id(decode_object(resp)), self.session_id, self.transport)

    def _many(self, resp: Response) -> list[WebElement]:
        return [
            WebElement(element_id(ref), self.session_id, self.transport)
            for ref in decode_list(resp)
        ]


class Elements(_Finder):
    """Session-scoped element lookup."""

    def find_one(self, by: By | str, value: str):
        return self._call(POST, "/element", _locator(by, value), self._one)

    def find(self, by: By | str, value: str):
        return self._call(POST, "/elements", _locator(by, value), self._many)

    def active(self):
        """Return the element that currently has focus."""
        return self._call(GET, "/element/active", None, self._one)


class WebElement(_Finder):
    """
    Reference to a DOM element.

    Args:
        element_id: Remote element id
        session_id: Id of the session that produced the element
        transport: Transport shared with that session
    """

    def __init__(self, element_id: str, session_id: str, transport: Transport):
        super().__init__(transport, session_id)
        self.id = element_id

    def __repr__(self) -> str:
        return f"WebElement(id={self.id!r}, session_id={self.session_id!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WebElement):
            return NotImplemented
        return self.id == other.id and self.session_id == other.session_id

    def __hash__(self) -> int:
        return hash((self.id, self.session_id))

    def to_reference(self) -> dict[str, str]:
        """Serialize as a web element reference, e.g. for script arguments."""
        return {ELEMENT_KEY: self.id}

    def _path(self, suffix: str = "") -> str:
        return f"/session/{self.session_id}/element/{self.id}{suffix}"

    def click(self):
        return self._call(POST, "/click", None, expect_success)

    def clear(self):
        return self._call(POST, "/clear", None, expect_success)

    def send_keys(self, *keys: str):
        """
        Type keys into the element.

        Keys are joined with a single space before sending.

        Raises:
            InvalidArgumentsError: If no keys are given
        """
        if not keys:
            raise InvalidArgumentsError("no keys to send")
        text = " ".join(str(k) for k in keys)
        return self._call(POST, "/value", {"text": text}, expect_success)

    def find_one(self, by: By | str, value: str):
        return self._call(POST, "/element", _locator(by, value), self._one)

    def find(self, by: By | str, value: str):
        return self._call(POST, "/elements", _locator(by, value), self._many)

    def tag_name(self):
        return self._call(GET, "/name", None, raw_string)

    def text(self):
        return self._call(GET, "/text", None, raw_string)

    def is_selected(self):
        return self._call(GET, "/selected", None, decode_bool)

    def is_enabled(self):
        return self._call(GET, "/enabled", None, decode_bool)

    def get_attribute(self, name: str):
        _require_name(name)
        return self._call(GET, f"/attribute/{name}", None, raw_string)

    def get_property(self, name: str):
        _require_name(name)
        return self._call(GET, f"/property/{name}", None, raw_string)

    def get_css_value(self, name: str):
        _require_name(name)
        return self._call(GET, f"/css/{name}", None, raw_string)

    def rect(self):
        return self._call(GET, "/rect", None, _rect)

    def screenshot(self):
        """Capture this element; returns a readable stream of image bytes."""
        return self._call(GET, "/screenshot", None, decode_screenshot)


def _require_name(name: str) -> None:
    if not name:
        raise InvalidArgumentsError("empty name")


def _rect(resp: Response) -> Rect:
    return Rect.model_validate(decode_object(resp))
