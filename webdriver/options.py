"""
Browser options: the ``alwaysMatch``/``firstMatch`` pair sent on session
creation, plus fluent builders for Chrome and Firefox vendor sections.
"""

from __future__ import annotations

import base64
import binascii
import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from webdriver import capabilities as caps_mod
from webdriver.capabilities import Capabilities, Platform
from webdriver.models import Proxy, Timeout

CHROME_OPTIONS_KEY = "goog:chromeOptions"
FIREFOX_OPTIONS_KEY = "moz:firefoxOptions"


class InvalidExtensionError(ValueError):
    """Extension payload is not standard base64."""

    def __init__(self, message: str = "string does not match format base64"):
        super().__init__(message)


def is_base64(value: str) -> bool:
    if not value:
        return False
    try:
        base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return False
    return True


@dataclass
class BrowserOptions:
    """
    Capability request for a new session.

    Attributes:
        always_match: Capabilities every match must satisfy
        first_match: Ordered alternatives; the remote end picks the first it accepts
        proxy: Optional proxy, stamped into ``alwaysMatch`` on serialization
    """

    always_match: Capabilities = field(default_factory=Capabilities)
    first_match: list[Capabilities] = field(default_factory=list)
    proxy: Proxy | None = None

    def to_params(self) -> dict[str, Any]:
        always = Capabilities(self.always_match)
        if self.proxy is not None:
            caps_mod.set_proxy(always, self.proxy)
        params: dict[str, Any] = {"alwaysMatch": always}
        if self.first_match:
            params["firstMatch"] = list(self.first_match)
        return params


class _CapabilityBuilder:
    """Fluent setters for the W3C-standard capability keys."""

    def __init__(self):
        self.capabilities = Capabilities()
        self.first_match: list[Capabilities] = []

    def set_browser_name(self, name: str):
        caps_mod.set_browser_name(self.capabilities, name)
        return self

    def set_browser_version(self, version: str):
        caps_mod.set_browser_version(self.capabilities, version)
        return self

    def set_platform_name(self, platform: Platform | str):
        caps_mod.set_platform_name(self.capabilities, platform)
        return self

    def set_accept_insecure_certs(self, flag: bool):
        caps_mod.set_accept_insecure_certs(self.capabilities, flag)
        return self

    def set_page_load_strategy(self, strategy: str):
        caps_mod.set_page_load_strategy(self.capabilities, strategy)
        return self

    def set_window_rect(self, flag: bool):
        caps_mod.set_window_rect(self.capabilities, flag)
        return self

    def set_proxy(self, proxy: Proxy):
        caps_mod.set_proxy(self.capabilities, proxy)
        return self

    def set_unhandled_prompt_behavior(self, behavior: str):
        caps_mod.set_unhandled_prompt_behavior(self.capabilities, behavior)
        return self

    def set_strict_file_interactability(self, flag: bool):
        caps_mod.set_strict_file_interactability(self.capabilities, flag)
        return self

    def set_timeout(self, timeout: Timeout):
        caps_mod.set_timeout(self.capabilities, timeout)
        return self

    def add_first_match(self, key: str, value: Any):
        if key:
            self.first_match.append(Capabilities({key: value}))
        return self

    def _build(self, vendor_key: str, vendor_section: Capabilities) -> BrowserOptions:
        always = copy.deepcopy(self.capabilities)
        always[vendor_key] = vendor_section
        return BrowserOptions(
            always_match=always,
            first_match=copy.deepcopy(self.first_match),
        )


@dataclass
class DeviceMetrics:
    width: int
    height: int
    pixel_ratio: float
    touch: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "pixelRatio": self.pixel_ratio,
            "touch": self.touch,
        }


class MobileEmulation:
    """``mobileEmulation`` section of the Chrome options."""

    def __init__(self):
        self.opts = Capabilities()

    def set(self, key: str, value: Any) -> MobileEmulation:
        self.opts.set(key, value)
        return self

    def set_device_name(self, name: str) -> MobileEmulation:
        return self.set("deviceName", name)

    def set_device_metrics(self, metrics: DeviceMetrics | None) -> MobileEmulation:
        if metrics is None:
            return self
        return self.set("deviceMetrics", metrics.to_dict())

    def set_user_agent(self, agent: str) -> MobileEmulation:
        return self.set("userAgent", agent)


class PerfLoggingPreferences:
    """``perfLoggingPrefs`` section of the Chrome options."""

    def __init__(self):
        self.opts = Capabilities()

    def set(self, key: str, value: Any) -> PerfLoggingPreferences:
        self.opts.set(key, value)
        return self

    def enable_network(self, flag: bool) -> PerfLoggingPreferences:
        return self.set("enableNetwork", flag)

    def enable_timeline(self, flag: bool) -> PerfLoggingPreferences:
        return self.set("enableTimeline", flag)

    def enable_page(self, flag: bool) -> PerfLoggingPreferences:
        return self.set("enablePage", flag)

    def tracing_categories(self, categories: str) -> PerfLoggingPreferences:
        return self.set("tracingCategories", categories)

    def buffer_usage_reporting_interval(self, millis: int) -> PerfLoggingPreferences:
        return self.set("bufferUsageReportingInterval", millis)


class ChromeOptions(_CapabilityBuilder):
    """
    Builder for a Chrome session request.

    Example:
        >>> opts = (
        ...     ChromeOptions()
        ...     .set_browser_name("chrome")
        ...     .add_argument("--headless", "--no-sandbox")
        ...     .set_pref("download.default_directory", "/tmp")
        ... )
        >>> opts.mobile_emulation().set_device_name("Pixel 2")
        >>> browser_options = opts.build()
    """

    def __init__(self):
        super().__init__()
        self.chrome_capabilities = Capabilities()
        self.extensions: list[str] = []
        self.exclude_switches: list[str] = []
        self.window_types: list[str] = []
        self.local_state = Capabilities()
        self.args: list[str] = []
        self.prefs = Capabilities()
        self._mobile_emulation: MobileEmulation | None = None
        self._perf_logging_prefs: PerfLoggingPreferences | None = None

    def set_debugger_address(self, addr: str) -> ChromeOptions:
        self.chrome_capabilities.set("debuggerAddress", addr)
        return self

    def set_detach(self, flag: bool) -> ChromeOptions:
        self.chrome_capabilities.set("detach", flag)
        return self

    def set_binary(self, path: str) -> ChromeOptions:
        self.chrome_capabilities.set("binary", path)
        return self

    def set_minidump_path(self, path: str) -> ChromeOptions:
        self.chrome_capabilities.set("minidumpPath", path)
        return self

    def set_local_state(self, key: str, value: Any) -> ChromeOptions:
        self.local_state.set(key, value)
        return self

    def set_pref(self, key: str, value: Any) -> ChromeOptions:
        self.prefs.set(key, value)
        return self

    def add_argument(self, *args: str) -> ChromeOptions:
        self.args.extend(args)
        return self

    def add_extension(self, encoded: str) -> ChromeOptions:
        """
        Add a packed extension given as base64.

        Raises:
            InvalidExtensionError: If ``encoded`` is not valid base64
        """
        if not is_base64(encoded):
            raise InvalidExtensionError()
        self.extensions.append(encoded)
        return self

    def add_extension_file(self, path: str | Path) -> ChromeOptions:
        """Read an already packed ``.crx`` file and add it as base64."""
        data = Path(path).read_bytes()
        return self.add_extension(base64.b64encode(data).decode("ascii"))

    def add_exclude_switches(self, *switches: str) -> ChromeOptions:
        self.exclude_switches.extend(s for s in switches if s)
        return self

    def add_window_types(self, *types: str) -> ChromeOptions:
        self.window_types.extend(t for t in types if t)
        return self

    def mobile_emulation(self) -> MobileEmulation:
        if self._mobile_emulation is None:
            self._mobile_emulation = MobileEmulation()
        return self._mobile_emulation

    def perf_logging_preferences(self) -> PerfLoggingPreferences:
        if self._perf_logging_prefs is None:
            self._perf_logging_prefs = PerfLoggingPreferences()
        return self._perf_logging_prefs

    def build(self) -> BrowserOptions:
        section = copy.deepcopy(self.chrome_capabilities)
        for key, value in (
            ("extensions", self.extensions),
            ("localState", self.local_state),
            ("excludeSwitches", self.exclude_switches),
            ("windowTypes", self.window_types),
            ("args", self.args),
            ("prefs", self.prefs),
        ):
            if value:
                section[key] = copy.deepcopy(value)
        if self._mobile_emulation is not None and self._mobile_emulation.opts:
            section["mobileEmulation"] = copy.deepcopy(self._mobile_emulation.opts)
        if self._perf_logging_prefs is not None and self._perf_logging_prefs.opts:
            section["perfLoggingPrefs"] = copy.deepcopy(self._perf_logging_prefs.opts)
        return self._build(CHROME_OPTIONS_KEY, section)


class FirefoxOptions(_CapabilityBuilder):
    """Builder for a Firefox session request (``moz:firefoxOptions``)."""

    def __init__(self):
        super().__init__()
        self.args: list[str] = []
        self.prefs = Capabilities()
        self.env = Capabilities()
        self.binary: str | None = None
        self.profile: str | None = None
        self.log_level: str | None = None

    def add_argument(self, *args: str) -> FirefoxOptions:
        self.args.extend(args)
        return self

    def set_binary(self, path: str) -> FirefoxOptions:
        self.binary = path
        return self

    def set_pref(self, key: str, value: Any) -> FirefoxOptions:
        self.prefs.set(key, value)
        return self

    def set_env(self, key: str, value: str) -> FirefoxOptions:
        self.env.set(key, value)
        return self

    def set_log_level(self, level: str) -> FirefoxOptions:
        self.log_level = level
        return self

    def set_profile(self, encoded: str) -> FirefoxOptions:
        """Set a zipped profile directory given as base64."""
        if not is_base64(encoded):
            raise InvalidExtensionError()
        self.profile = encoded
        return self

    def build(self) -> BrowserOptions:
        section = Capabilities()
        if self.args:
            section["args"] = list(self.args)
        if self.binary:
            section["binary"] = self.binary
        if self.prefs:
            section["prefs"] = copy.deepcopy(self.prefs)
        if self.profile:
            section["profile"] = self.profile
        if self.log_level:
            section["log"] = {"level": self.log_level}
        if self.env:
            section["env"] = copy.deepcopy(self.env)
        return self._build(FIREFOX_OPTIONS_KEY, section)
