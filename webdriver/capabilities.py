"""
Capability maps sent during session negotiation.

``Capabilities`` is a plain ``dict`` with lenient typed readers. The module
level ``set_*``/``get_*`` helpers cover the W3C-standard keys; vendor keys
(``goog:``, ``moz:``) are stored untouched.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from webdriver.models import Proxy, Timeout

BROWSER_NAME = "browserName"
BROWSER_VERSION = "browserVersion"
PLATFORM_NAME = "platformName"
ACCEPT_INSECURE_CERTS = "acceptInsecureCerts"
PAGE_LOAD_STRATEGY = "pageLoadStrategy"
PROXY = "proxy"
SET_WINDOW_RECT = "setWindowRect"
TIMEOUTS = "timeouts"
UNHANDLED_PROMPT_BEHAVIOR = "unhandledPromptBehavior"
STRICT_FILE_INTERACTABILITY = "strictFileInteractability"


class Platform(str, Enum):
    LINUX = "linux"
    MAC = "mac"
    WINDOWS = "windows"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class Capabilities(dict):
    """
    String-keyed capability map.

    Readers never raise: a missing key or a value of the wrong type yields the
    zero value of the requested type.
    """

    def has(self, key: str) -> bool:
        return key in self

    def set(self, key: str, value: Any) -> Capabilities:
        self[key] = value
        return self

    def get_string(self, key: str) -> str:
        value = self.get(key)
        if isinstance(value, str):
            return value
        if isinstance(value, (bytes, bytearray)):
            return bytes(value).decode("utf-8", "replace")
        return ""

    def get_bool(self, key: str) -> bool:
        value = self.get(key)
        return value if isinstance(value, bool) else False

    def get_int(self, key: str) -> int:
        value = self.get(key)
        return int(value) if _is_number(value) else 0

    def get_uint(self, key: str) -> int:
        return max(self.get_int(key), 0)

    def get_float(self, key: str) -> float:
        value = self.get(key)
        return float(value) if _is_number(value) else 0.0

    def get_string_slice(self, key: str) -> list[str] | None:
        value = self.get(key)
        if not isinstance(value, (list, tuple)):
            return None
        if not all(isinstance(item, str) for item in value):
            return None
        return list(value)

    def section(self, key: str) -> Capabilities | None:
        """
        Return the nested map stored under ``key``.

        The nested dict is promoted to ``Capabilities`` in place so that writes
        through the returned object are visible from the parent.
        """
        value = self.get(key)
        if isinstance(value, Capabilities):
            return value
        if isinstance(value, dict):
            promoted = Capabilities(value)
            self[key] = promoted
            return promoted
        return None


def set_browser_name(caps: Capabilities, name: str) -> None:
    caps[BROWSER_NAME] = name


def get_browser_name(caps: Capabilities) -> str:
    return caps.get_string(BROWSER_NAME)


def set_browser_version(caps: Capabilities, version: str) -> None:
    caps[BROWSER_VERSION] = version


def get_browser_version(caps: Capabilities) -> str:
    return caps.get_string(BROWSER_VERSION)


def set_platform_name(caps: Capabilities, platform: Platform | str) -> None:
    """Raises ValueError for anything but linux, mac or windows."""
    try:
        caps[PLATFORM_NAME] = Platform(platform).value
    except ValueError as e:
        raise ValueError(f"unknown platform {platform}") from e


def get_platform_name(caps: Capabilities) -> str:
    return caps.get_string(PLATFORM_NAME)


def set_accept_insecure_certs(caps: Capabilities, flag: bool) -> None:
    caps[ACCEPT_INSECURE_CERTS] = flag


def get_accept_insecure_certs(caps: Capabilities) -> bool:
    return caps.get_bool(ACCEPT_INSECURE_CERTS)


def set_page_load_strategy(caps: Capabilities, strategy: str) -> None:
    caps[PAGE_LOAD_STRATEGY] = strategy


def get_page_load_strategy(caps: Capabilities) -> str:
    return caps.get_string(PAGE_LOAD_STRATEGY)


def set_window_rect(caps: Capabilities, flag: bool) -> None:
    caps[SET_WINDOW_RECT] = flag


def get_window_rect(caps: Capabilities) -> bool:
    return caps.get_bool(SET_WINDOW_RECT)


def set_unhandled_prompt_behavior(caps: Capabilities, behavior: str) -> None:
    caps[UNHANDLED_PROMPT_BEHAVIOR] = behavior


def get_unhandled_prompt_behavior(caps: Capabilities) -> str:
    return caps.get_string(UNHANDLED_PROMPT_BEHAVIOR)


def set_strict_file_interactability(caps: Capabilities, flag: bool) -> None:
    caps[STRICT_FILE_INTERACTABILITY] = flag


def get_strict_file_interactability(caps: Capabilities) -> bool:
    return caps.get_bool(STRICT_FILE_INTERACTABILITY)


def set_proxy(caps: Capabilities, proxy: Proxy) -> None:
    caps[PROXY] = Capabilities(proxy.to_dict())


def get_proxy(caps: Capabilities) -> Proxy | None:
    section = caps.section(PROXY)
    if section is None:
        return None
    try:
        return Proxy.model_validate(dict(section))
    except ValueError:
        return None


def set_timeout(caps: Capabilities, timeout: Timeout) -> None:
    caps[TIMEOUTS] = Capabilities(timeout.to_dict())


def get_timeout(caps: Capabilities) -> Timeout | None:
    section = caps.section(TIMEOUTS)
    if section is None:
        return None
    try:
        return Timeout.model_validate(dict(section))
    except ValueError:
        return None
