"""
End-to-end command flows over HttpTransport with a mocked requests.Session
"""

import base64
import json
from unittest.mock import MagicMock, Mock

import pytest

from webdriver.capabilities import Capabilities, get_timeout
from webdriver.errors import ProtocolError, UnknownSessionError
from webdriver.httpclient import HttpClient
from webdriver.options import BrowserOptions
from webdriver.session import Session
from webdriver.transport import HttpTransport

BASE_URL = "http://localhost:4444"


class FakeRemoteEnd:
    """Answers prepared requests from a (method, path) -> (status, body) table."""

    def __init__(self, routes):
        self.routes = routes
        self.requests = []
        self.session = MagicMock()
        self.session.send.side_effect = self.send

    def send(self, prepared, timeout=None):
        self.requests.append(prepared)
        status, body = self.routes[(prepared.method, prepared.url[len(BASE_URL):])]
        resp = Mock()
        resp.status_code = status
        resp.content = body.encode("utf-8") if isinstance(body, str) else body
        return resp

    def transport(self) -> HttpTransport:
        return HttpTransport(HttpClient(BASE_URL, session=self.session))

    def body(self, index: int):
        return json.loads(self.requests[index].body)


def firefox_options() -> BrowserOptions:
    return BrowserOptions(always_match=Capabilities({"browserName": "firefox"}))


class TestScenarios:
    """Command flows against literal reply bytes."""

    def test_create_session(self):
        remote = FakeRemoteEnd(
            {
                ("POST", "/session"): (
                    200,
                    '{"value":{"sessionId":"4419604c-8c72-ea4c-8859-5b5de5098b2f",'
                    '"capabilities":{"browserName":"firefox","browserVersion":"73.0.1",'
                    '"timeouts":{"implicit":0,"pageLoad":300000,"script":30000}}}}',
                )
            }
        )

        session = Session.create(remote.transport(), firefox_options())

        caps = session.capabilities()
        assert session.id == "4419604c-8c72-ea4c-8859-5b5de5098b2f"
        assert caps.get_string("browserName") == "firefox"
        timeout = get_timeout(caps)
        assert (timeout.implicit, timeout.page_load, timeout.script) == (0, 300000, 30000)

    def test_missing_session_id(self):
        remote = FakeRemoteEnd({("POST", "/session"): (200, '{"value":{"sessionId":""}}')})
        with pytest.raises(UnknownSessionError):
            Session.create(remote.transport(), firefox_options())

    def test_navigate_and_read_title(self):
        remote = FakeRemoteEnd(
            {
                ("POST", "/session/123/url"): (200, '{"value":null}'),
                ("GET", "/session/123/title"): (200, '{"value":"MediaBuyerBot"}'),
            }
        )
        session = Session(remote.transport(), "123", Capabilities())

        session.navigation.navigate_to("https://example.com")
        title = session.navigation.get_title()

        assert remote.body(0) == {"url": "https://example.com"}
        assert title == '"MediaBuyerBot"'

    def test_find_element(self):
        remote = FakeRemoteEnd(
            {
                ("POST", "/session/123/element"): (
                    200,
                    '{"value":{"element-6066-11e4-a52e-4f735466cecf":'
                    '"73101597-492f-4ffe-8f75-bd7bd0acb691"}}',
                )
            }
        )
        session = Session(remote.transport(), "123", Capabilities())

        element = session.elements.find_one("css selector", "#id")

        assert remote.requests[0].body == b'{"using":"css selector","value":"#id"}'
        assert element.id == "73101597-492f-4ffe-8f75-bd7bd0acb691"

    def test_error_decoding(self):
        remote = FakeRemoteEnd(
            {
                ("POST", "/"): (
                    500,
                    '{"value":{"error":"unexpected alert open","message":"error",'
                    '"stacktrace":"stacktrace","data":{"text":"Message from window.alert"}}}',
                )
            }
        )

        with pytest.raises(ProtocolError) as exc_info:
            remote.transport().do("POST", "/")

        err = exc_info.value
        assert err.code == "unexpected alert open"
        assert err.message == "error"
        assert err.stacktrace == "stacktrace"
        assert err.data["text"] == "Message from window.alert"

    def test_screenshot(self):
        encoded = base64.b64encode(b"mmadfox").decode("ascii")
        remote = FakeRemoteEnd(
            {("GET", "/session/123/screenshot"): (200, f'{{"value":"{encoded}"}}')}
        )
        session = Session(remote.transport(), "123", Capabilities())

        stream = session.screen_capture.take()

        assert list(stream.read()) == [109, 109, 97, 100, 102, 111, 120]
