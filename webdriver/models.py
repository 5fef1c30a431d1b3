"""
Pydantic models for WebDriver wire objects.
"""

from datetime import timedelta
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProxyType(str, Enum):
    """Proxy configuration kinds."""

    DIRECT = "direct"
    MANUAL = "manual"
    AUTODETECT = "autodetect"
    SYSTEM = "system"
    PAC = "pac"


class WindowType(str, Enum):
    TAB = "tab"
    WINDOW = "window"


def _truncate_number(value: Any) -> Any:
    # remote ends may send element geometry as floats
    if isinstance(value, float):
        return int(value)
    return value


class Proxy(BaseModel):
    """
    Proxy capability.

    Only ``proxy_type`` is always sent; the other fields are omitted when unset.

    Example:
        >>> Proxy(proxy_type=ProxyType.MANUAL, http_proxy="10.0.0.1", http_proxy_port=3128)
    """

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    proxy_type: ProxyType = Field(alias="proxyType")
    proxy_autoconfig_url: str | None = Field(default=None, alias="proxyAutoconfigUrl")
    ftp_proxy: str | None = Field(default=None, alias="ftpProxy")
    http_proxy: str | None = Field(default=None, alias="httpProxy")
    ssl_proxy: str | None = Field(default=None, alias="sslProxy")
    socks_proxy: str | None = Field(default=None, alias="socksProxy")
    socks_username: str | None = Field(default=None, alias="socksUsername")
    socks_password: str | None = Field(default=None, alias="socksPassword")
    no_proxy: list[str] | None = Field(default=None, alias="noProxy")
    http_proxy_port: int | None = Field(default=None, alias="httpProxyPort")
    ssl_proxy_port: int | None = Field(default=None, alias="sslProxyPort")
    socks_proxy_port: int | None = Field(default=None, alias="socksProxyPort")

    def to_dict(self) -> dict[str, Any]:
        data = self.model_dump(by_alias=True, exclude_none=True, mode="json")
        # empty values are omitted on the wire
        return {k: v for k, v in data.items() if v not in ("", [], 0) or k == "proxyType"}


class Timeout(BaseModel):
    """Session timeouts in milliseconds."""

    model_config = ConfigDict(populate_by_name=True)

    implicit: int = Field(default=0, ge=0)
    page_load: int = Field(default=0, ge=0, alias="pageLoad")
    script: int = Field(default=0, ge=0)

    @field_validator("implicit", "page_load", "script", mode="before")
    @classmethod
    def _null_is_zero(cls, v: Any) -> Any:
        if v is None:
            return 0
        return _truncate_number(v)

    @property
    def implicit_duration(self) -> timedelta:
        return timedelta(milliseconds=self.implicit)

    @property
    def page_load_duration(self) -> timedelta:
        return timedelta(milliseconds=self.page_load)

    @property
    def script_duration(self) -> timedelta:
        return timedelta(milliseconds=self.script)

    def to_dict(self) -> dict[str, int]:
        return self.model_dump(by_alias=True)


class Rect(BaseModel):
    """Window or element rectangle. ``x`` and ``y`` may be negative."""

    width: int = 0
    height: int = 0
    x: int = 0
    y: int = 0

    @field_validator("width", "height", "x", "y", mode="before")
    @classmethod
    def _truncate(cls, v: Any) -> Any:
        return _truncate_number(v)

    def to_dict(self) -> dict[str, int]:
        return self.model_dump()


class Window(BaseModel):
    handle: str
    type: str = ""

    def __str__(self) -> str:
        return self.handle


class Build(BaseModel):
    version: str | None = None
    revision: str | None = None
    time: str | None = None


class OS(BaseModel):
    arch: str | None = None
    name: str | None = None
    version: str | None = None


class Status(BaseModel):
    """Reply of GET /status."""

    message: str
    ready: bool
    build: Build | None = None
    os: OS | None = None

    def has_extension_info(self) -> bool:
        return self.build is not None and bool(self.build.version)


class Cookie(BaseModel):
    """
    Browser cookie.

    ``name`` and ``value`` are required by the remote end; unknown keys are kept
    and sent back unchanged.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str | None = None
    value: Any = None
    path: str | None = None
    domain: str | None = None
    secure: bool | None = None
    expiry: int | None = None
    http_only: bool | None = Field(default=None, alias="httpOnly")
    same_site: str | None = Field(default=None, alias="sameSite")

    @field_validator("expiry", mode="before")
    @classmethod
    def _expiry_int(cls, v: Any) -> Any:
        return _truncate_number(v)

    def is_valid(self) -> bool:
        return {"name", "value"} <= self.model_fields_set

    def to_dict(self) -> dict[str, Any]:
        data = self.model_dump(by_alias=True, exclude_unset=True)
        if self.model_extra:
            data.update(self.model_extra)
        return data
