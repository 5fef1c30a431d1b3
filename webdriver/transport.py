"""
HTTP transport for the WebDriver wire protocol.

A transport turns ``do(method, path, params)`` into an HTTP request with the
fixed WebDriver headers, then parses the reply envelope
``{"sessionId": ..., "status": ..., "value": ...}`` into a ``Response`` or
raises the matching error.
"""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Any

from webdriver.errors import (
    EmptyResponseError,
    InvalidArgumentsError,
    MalformedResponseError,
    ProtocolError,
    ResponseWithoutBodyError,
)
from webdriver.httpclient import AsyncHttpClient, HttpClient
from webdriver.logger import WebDriverLogger, get_logger

GET = "GET"
POST = "POST"
DELETE = "DELETE"

HEADERS = {
    "Content-Type": "application/json;charset=utf-8",
    "Accept": "application/json",
    "Accept-charset": "utf-8",
    "Cache-Control": "no-cache",
}

Params = dict[str, Any]

_DECODER = json.JSONDecoder()
_WHITESPACE = re.compile(r"[ \t\n\r]*")


@dataclass(frozen=True)
class Response:
    """
    Parsed reply envelope.

    ``value`` keeps the raw JSON text of the ``value`` member so that commands
    decide how to read it: ``"null"`` for a null value and ``""`` when absent.
    """

    session_id: str = ""
    status: int = 0
    value: str = ""

    def success(self) -> bool:
        return self.value == "null"

    def json(self) -> Any:
        """Decode ``value``. Raises ``ValueError`` for invalid JSON."""
        return json.loads(self.value)


def raw_member(document: str, name: str) -> str | None:
    """
    Return the undecoded JSON text of the top-level member ``name``.

    ``document`` must already be known to hold a valid JSON object. When a key
    repeats, the last occurrence wins, as with ``json.loads``.
    """
    skip = _WHITESPACE.match
    pos = skip(document, 0).end() + 1
    pos = skip(document, pos).end()
    found = None
    while document[pos] != "}":
        key, pos = _DECODER.raw_decode(document, pos)
        pos = skip(document, skip(document, pos).end() + 1).end()
        _, end = _DECODER.raw_decode(document, pos)
        if key == name:
            found = document[pos:end]
        pos = skip(document, end).end()
        if document[pos] == ",":
            pos = skip(document, pos + 1).end()
    return found


def encode_params(params: Params | None) -> bytes:
    """Serialize POST parameters; a missing map is sent as ``{}``."""
    return json.dumps(params or {}, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def parse_response(http_status: int, body: bytes | None) -> Response:
    """
    Turn an HTTP status and body into a ``Response``.

    Raises:
        ResponseWithoutBodyError: body is None
        EmptyResponseError: body is empty
        MalformedResponseError: body is not a JSON object
        ProtocolError: HTTP status >= 400 or a non-zero legacy status
    """
    if body is None:
        raise ResponseWithoutBodyError()
    if len(body) == 0:
        raise EmptyResponseError()

    try:
        text = body.decode("utf-8")
        envelope = json.loads(text)
    except ValueError as e:
        raise MalformedResponseError(f"{e}, {body.decode('utf-8', 'replace')}") from e
    if not isinstance(envelope, dict):
        raise MalformedResponseError(f"expected JSON object, {body.decode('utf-8', 'replace')}")

    status = envelope.get("status") or 0
    if isinstance(status, bool) or not isinstance(status, (int, float)):
        raise MalformedResponseError(f"status is not a number: {status!r}")

    response = Response(
        session_id=str(envelope.get("sessionId") or ""),
        status=int(status),
        value=raw_member(text, "value") or "",
    )
    if http_status >= 400 or response.status != 0:
        raise ProtocolError.from_response(http_status, response)

    return Response(
        session_id=response.session_id.strip('{}"'),
        status=response.status,
        value=response.value,
    )


class Transport(ABC):
    """Sends a WebDriver command and returns the parsed ``Response``."""

    @abstractmethod
    def do(
        self, method: str, path: str, params: Params | None = None
    ) -> Response | Awaitable[Response]:
        """
        Send one command.

        Args:
            method: GET, POST or DELETE
            path: Path relative to the endpoint, e.g. ``/session/{id}/url``
            params: JSON body for POST; ignored for GET and DELETE
        """
        pass


def _check_method(method: str) -> str:
    method = method.upper()
    if method not in (GET, POST, DELETE):
        raise InvalidArgumentsError(f"unknown HTTP method {method!r}")
    return method


class HttpTransport(Transport):
    """
    Blocking transport over ``HttpClient``.

    Example:
        >>> transport = HttpTransport(HttpClient("127.0.0.1:9515"))
        >>> resp = transport.do("GET", "/status")
    """

    def __init__(self, client: HttpClient, logger: WebDriverLogger | None = None):
        self.client = client
        self.headers = dict(HEADERS)
        self.logger = logger or get_logger("transport")

    def do(self, method: str, path: str, params: Params | None = None) -> Response:
        method = _check_method(method)
        self.logger.debug(f"{method} {path}")
        if method == GET:
            http_resp = self.client.get(path, headers=self.headers)
        elif method == DELETE:
            http_resp = self.client.delete(path, headers=self.headers)
        else:
            http_resp = self.client.post(path, encode_params(params), headers=self.headers)
        return parse_response(http_resp.status_code, http_resp.content)


class AsyncHttpTransport(Transport):
    """Awaitable transport over ``AsyncHttpClient``."""

    def __init__(self, client: AsyncHttpClient, logger: WebDriverLogger | None = None):
        self.client = client
        self.headers = dict(HEADERS)
        self.logger = logger or get_logger("transport")

    def do(self, method: str, path: str, params: Params | None = None) -> Awaitable[Response]:
        # raises at call time, not on await
        method = _check_method(method)
        return self._do(method, path, params)

    async def _do(self, method: str, path: str, params: Params | None) -> Response:
        self.logger.debug(f"{method} {path}")
        if method == GET:
            http_resp = await self.client.get(path, headers=self.headers)
        elif method == DELETE:
            http_resp = await self.client.delete(path, headers=self.headers)
        else:
            http_resp = await self.client.post(path, encode_params(params), headers=self.headers)
        return parse_response(http_resp.status_code, http_resp.content)

    async def close(self) -> None:
        await self.client.close()
