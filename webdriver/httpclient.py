"""
Retrying HTTP clients used by the WebDriver transports.

``HttpClient`` wraps a ``requests.Session`` and ``AsyncHttpClient`` wraps an
``aiohttp.ClientSession``. Both run the same pipeline around every attempt:

    request_hook -> send -> error_hook / response_hook -> check_retry -> backoff

and hand the last outcome to ``error_handler`` when retries run out.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import aiohttp
import requests

from webdriver.logger import WebDriverLogger, get_logger

DEFAULT_RETRY_COUNT = 0
DEFAULT_HTTP_TIMEOUT = 30.0
DEFAULT_BACKOFF = 5.0

RequestHook = Callable[[Any, int], Any]
ResponseHook = Callable[[Any, Any], None]
ErrorHook = Callable[[Any, BaseException, int], None]
CheckRetry = Callable[[Any, Any, "BaseException | None"], bool]
Backoff = Callable[[int, Any], float]
ErrorHandler = Callable[[Any, "BaseException | None", int], Any]


def default_check_retry(request: Any, response: Any, exc: BaseException | None) -> bool:
    """Retry only when the request itself failed (connection refused, timeout, ...)."""
    return exc is not None


def default_backoff(attempt: int, response: Any) -> float:
    return DEFAULT_BACKOFF


def normalize_base_url(base_url: str) -> str:
    """
    Validate a base URL and add the ``http://`` scheme when missing.

    Raises:
        ValueError: If base_url is empty
    """
    if not base_url:
        raise ValueError("httpclient: bad url")
    if not base_url.startswith("http"):
        base_url = "http://" + base_url
    return base_url.rstrip("/")


@dataclass
class HttpResponse:
    """Fully read response returned by ``AsyncHttpClient``."""

    status_code: int
    content: bytes | None
    headers: dict[str, str] = field(default_factory=dict)


class _RetryPolicy:
    """Hook set shared by the sync and async clients."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        retry_count: int = DEFAULT_RETRY_COUNT,
        request_hook: RequestHook | None = None,
        response_hook: ResponseHook | None = None,
        error_hook: ErrorHook | None = None,
        check_retry: CheckRetry | None = None,
        backoff: Backoff | None = None,
        error_handler: ErrorHandler | None = None,
        logger: WebDriverLogger | None = None,
    ):
        self.base_url = normalize_base_url(base_url)
        self.timeout = timeout
        self.retry_count = max(retry_count, 0)
        self.request_hook = request_hook
        self.response_hook = response_hook
        self.error_hook = error_hook
        self.check_retry = check_retry or default_check_retry
        self.backoff = backoff or default_backoff
        self.error_handler = error_handler
        self.logger = logger or get_logger("httpclient")

    def url(self, path: str) -> str:
        return self.base_url + path

    def _after_attempt(
        self, request: Any, response: Any, exc: BaseException | None, attempt: int
    ) -> tuple[bool, float | None]:
        """
        Run the post-attempt hooks.

        Returns:
            (retried_out, delay). ``delay`` is None when no further attempt is made;
            ``retried_out`` is True when the policy still wanted to retry.
        """
        if exc is not None and self.error_hook is not None:
            self.error_hook(request, exc, attempt)
        if exc is None and self.response_hook is not None:
            self.response_hook(request, response)

        if not self.check_retry(request, response, exc):
            return False, None
        if attempt >= self.retry_count:
            self.logger.warning(f"giving up after {attempt + 1} attempt(s): {exc or 'bad response'}")
            return True, None
        delay = self.backoff(attempt, response)
        self.logger.warning(f"retrying request (attempt {attempt + 1}) in {delay}s: {exc}")
        return False, delay

    def _finish(self, response: Any, exc: BaseException | None, attempts: int, retried_out: bool):
        if retried_out and self.error_handler is not None:
            return self.error_handler(response, exc, attempts)
        if exc is not None:
            raise exc
        return response


class HttpClient(_RetryPolicy):
    """
    Synchronous retrying HTTP client built on ``requests``.

    Args:
        base_url: Endpoint address; ``http://`` is prepended when no scheme is given
        timeout: Per-request timeout in seconds (default 30)
        retry_count: Extra attempts after the first one (default 0)
        request_hook: Called as ``hook(prepared_request, attempt)`` before every attempt
        response_hook: Called as ``hook(prepared_request, response)`` after a reply
        error_hook: Called as ``hook(prepared_request, exc, attempt)`` after a failure
        check_retry: Decides whether an attempt should be retried
        backoff: Returns the delay in seconds before the next attempt
        error_handler: Produces the final result once retries are exhausted
        session: Optional ``requests.Session`` to reuse
        logger: Optional logger

    Example:
        >>> client = HttpClient("127.0.0.1:9515", retry_count=3, backoff=lambda n, r: 1.0)
        >>> resp = client.get("/status", headers={"Accept": "application/json"})
    """

    def __init__(self, base_url: str, *, session: requests.Session | None = None, **kwargs):
        super().__init__(base_url, **kwargs)
        self.session = session or requests.Session()

    def get(self, path: str, headers: dict[str, str] | None = None) -> requests.Response:
        return self.do(requests.Request("GET", self.url(path), headers=headers))

    def post(
        self, path: str, body: bytes | None = None, headers: dict[str, str] | None = None
    ) -> requests.Response:
        return self.do(requests.Request("POST", self.url(path), data=body, headers=headers))

    def put(
        self, path: str, body: bytes | None = None, headers: dict[str, str] | None = None
    ) -> requests.Response:
        return self.do(requests.Request("PUT", self.url(path), data=body, headers=headers))

    def delete(self, path: str, headers: dict[str, str] | None = None) -> requests.Response:
        return self.do(requests.Request("DELETE", self.url(path), headers=headers))

    def do(self, request: requests.Request | requests.PreparedRequest) -> requests.Response:
        """Send a request through the retry pipeline."""
        prepared = request.prepare() if isinstance(request, requests.Request) else request

        response: requests.Response | None = None
        exc: BaseException | None = None
        attempt = 0
        while True:
            if self.request_hook is not None:
                prepared = self.request_hook(prepared, attempt)

            response, exc = None, None
            try:
                response = self.session.send(prepared, timeout=self.timeout)
            except requests.exceptions.RequestException as e:
                exc = e

            retried_out, delay = self._after_attempt(prepared, response, exc, attempt)
            if delay is None:
                return self._finish(response, exc, attempt + 1, retried_out)

            if response is not None:
                response.close()
            time.sleep(delay)
            attempt += 1

    def close(self) -> None:
        self.session.close()


class AsyncHttpClient(_RetryPolicy):
    """
    Asynchronous counterpart of ``HttpClient`` built on ``aiohttp``.

    The session is created lazily inside the running event loop. Responses are
    read completely and returned as ``HttpResponse``.
    """

    def __init__(self, base_url: str, *, session: aiohttp.ClientSession | None = None, **kwargs):
        super().__init__(base_url, **kwargs)
        self._session = session

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
        return self._session

    async def get(self, path: str, headers: dict[str, str] | None = None) -> HttpResponse:
        return await self.do("GET", path, headers=headers)

    async def post(
        self, path: str, body: bytes | None = None, headers: dict[str, str] | None = None
    ) -> HttpResponse:
        return await self.do("POST", path, body=body, headers=headers)

    async def put(
        self, path: str, body: bytes | None = None, headers: dict[str, str] | None = None
    ) -> HttpResponse:
        return await self.do("PUT", path, body=body, headers=headers)

    async def delete(self, path: str, headers: dict[str, str] | None = None) -> HttpResponse:
        return await self.do("DELETE", path, headers=headers)

    async def do(
        self,
        method: str,
        path: str,
        body: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> HttpResponse:
        request: dict[str, Any] = {
            "method": method,
            "url": self.url(path),
            "data": body,
            "headers": dict(headers or {}),
        }

        response: HttpResponse | None = None
        exc: BaseException | None = None
        attempt = 0
        while True:
            if self.request_hook is not None:
                request = self.request_hook(request, attempt)

            response, exc = None, None
            try:
                async with self._get_session().request(**request) as resp:
                    content = await resp.read()
                    response = HttpResponse(
                        status_code=resp.status, content=content, headers=dict(resp.headers)
                    )
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                exc = e

            retried_out, delay = self._after_attempt(request, response, exc, attempt)
            if delay is None:
                return self._finish(response, exc, attempt + 1, retried_out)

            await asyncio.sleep(delay)
            attempt += 1

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
