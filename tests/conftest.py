"""
Pytest configuration and fixtures for WebDriver client tests
"""

import json
from typing import Any

import pytest

from webdriver.transport import Response, Transport

SESSION_ID = "123"


def reply(value: Any = None, session_id: str = "") -> Response:
    """Build a successful Response carrying ``value`` as raw JSON."""
    raw = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return Response(session_id=session_id, status=0, value=raw)


class MockTransport(Transport):
    """Records every command and answers from a queue of canned replies"""

    def __init__(self, *replies: Any):
        self.replies = list(replies)
        self.calls: list[tuple[str, str, Any]] = []

    def queue(self, *replies: Any) -> "MockTransport":
        self.replies.extend(replies)
        return self

    def _next(self) -> Response:
        item = self.replies.pop(0) if self.replies else reply(None)
        if isinstance(item, BaseException):
            raise item
        return item

    def do(self, method, path, params=None):
        self.calls.append((method, path, params))
        return self._next()

    @property
    def last_call(self) -> tuple[str, str, Any]:
        return self.calls[-1]


class AsyncMockTransport(MockTransport):
    """Same as MockTransport, but every reply has to be awaited"""

    def do(self, method, path, params=None):
        self.calls.append((method, path, params))

        async def pending():
            return self._next()

        return pending()


@pytest.fixture
def transport():
    """Blocking mock transport with an empty reply queue"""
    return MockTransport()


@pytest.fixture
def async_transport():
    """Awaitable mock transport with an empty reply queue"""
    return AsyncMockTransport()
