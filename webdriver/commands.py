"""
Shared plumbing for session-scoped command surfaces.

Every surface sends its request through ``CommandSurface._call``. With a
blocking transport the decoded result is returned directly; with an
awaitable transport a coroutine is returned that yields the same result.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any, TypeVar

from webdriver.errors import InvalidResponseError
from webdriver.transport import Params, Response, Transport

T = TypeVar("T")


class CommandSurface:
    """Base class holding the transport and the session id a surface talks to."""

    def __init__(self, transport: Transport, session_id: str):
        self.transport = transport
        self.session_id = session_id

    def _path(self, suffix: str = "") -> str:
        return f"/session/{self.session_id}{suffix}"

    def _call(
        self,
        method: str,
        suffix: str,
        params: Params | None,
        handler: Callable[[Response], T],
    ) -> T:
        return resolve(self.transport.do(method, self._path(suffix), params), handler)


def resolve(result: Any, handler: Callable[[Response], T]) -> T:
    """Apply ``handler`` now, or after awaiting when the transport is asynchronous."""
    if inspect.isawaitable(result):
        return _finish_async(result, handler)  # type: ignore[return-value]
    return handler(result)


async def _finish_async(pending: Any, handler: Callable[[Response], T]) -> T:
    return handler(await pending)


def expect_success(resp: Response) -> None:
    """Accept only a null ``value``."""
    if not resp.success():
        raise InvalidResponseError(f"expected null value, got {resp.value!r}")


def decode_json(resp: Response) -> Any:
    try:
        return resp.json()
    except ValueError as e:
        raise InvalidResponseError(f"value is not valid JSON: {resp.value!r}") from e


def raw_value(resp: Response) -> str:
    return resp.value


def raw_string(resp: Response) -> str:
    """Raw ``value`` text; null reads as ``""``."""
    if resp.success():
        return ""
    return resp.value


def decode_bool(resp: Response) -> bool:
    value = decode_json(resp)
    if not isinstance(value, bool):
        raise InvalidResponseError(f"expected boolean value, got {resp.value!r}")
    return value


def decode_object(resp: Response) -> dict[str, Any]:
    value = decode_json(resp)
    if not isinstance(value, dict):
        raise InvalidResponseError(f"expected object value, got {resp.value!r}")
    return value


def decode_list(resp: Response) -> list[Any]:
    value = decode_json(resp)
    if not isinstance(value, list):
        raise InvalidResponseError(f"expected array value, got {resp.value!r}")
    return value
