"""Tests for navigation, document and alert commands"""

import pytest

from conftest import SESSION_ID, MockTransport, reply
from webdriver.alert import Alert
from webdriver.document import Document
from webdriver.elements import ELEMENT_KEY, WebElement
from webdriver.errors import InvalidResponseError
from webdriver.navigation import Navigation
from webdriver.transport import Response


class TestNavigation:
    """Test navigation commands."""

    def test_navigate_to(self):
        transport = MockTransport(reply(None))
        Navigation(transport, SESSION_ID).navigate_to("https://example.com")
        assert transport.last_call == ("POST", "/session/123/url", {"url": "https://example.com"})

    def test_navigate_to_rejects_non_null_value(self):
        transport = MockTransport(reply("unexpected"))
        with pytest.raises(InvalidResponseError):
            Navigation(transport, SESSION_ID).navigate_to("https://example.com")

    def test_history(self):
        transport = MockTransport()
        nav = Navigation(transport, SESSION_ID)
        nav.back()
        nav.forward()
        nav.refresh()
        assert [path for _, path, _ in transport.calls] == [
            "/session/123/back",
            "/session/123/forward",
            "/session/123/refresh",
        ]
        assert all(method == "POST" for method, _, _ in transport.calls)

    def test_current_url_is_raw(self):
        transport = MockTransport(reply("https://example.com/"))
        url = Navigation(transport, SESSION_ID).get_current_url()
        assert transport.last_call == ("GET", "/session/123/url", None)
        assert url == '"https://example.com/"'

    def test_title_is_raw(self):
        transport = MockTransport(Response(value='"Example Domain"'))
        assert Navigation(transport, SESSION_ID).get_title() == '"Example Domain"'


class TestDocument:
    """Test page source and script execution."""

    def test_page_source(self):
        transport = MockTransport(reply("<html></html>"))
        source = Document(transport, SESSION_ID).get_page_source()
        assert transport.last_call == ("GET", "/session/123/source", None)
        assert source == '"<html></html>"'

    def test_execute_script_returns_raw_json(self):
        transport = MockTransport(Response(value='{"sum": 3}'))
        result = Document(transport, SESSION_ID).execute_script("return arguments[0]", [1, 2])
        assert transport.last_call == (
            "POST",
            "/session/123/execute/sync",
            {"script": "return arguments[0]", "args": [1, 2]},
        )
        assert result == '{"sum": 3}'

    def test_execute_script_without_args(self):
        transport = MockTransport(reply(None))
        assert Document(transport, SESSION_ID).execute_script("void 0") == "null"
        assert transport.last_call[2] == {"script": "void 0", "args": []}

    def test_execute_async_script_with_element(self):
        transport = MockTransport(reply(True))
        element = WebElement("el-1", SESSION_ID, transport)

        result = Document(transport, SESSION_ID).execute_async_script(
            "arguments[1](arguments[0])", [element]
        )

        method, path, params = transport.last_call
        assert path == "/session/123/execute/async"
        assert params["args"] == [{ELEMENT_KEY: "el-1"}]
        assert result == "true"


class TestAlert:
    """Test user prompt commands."""

    def test_accept_and_dismiss(self):
        transport = MockTransport()
        alert = Alert(transport, SESSION_ID)
        alert.accept()
        alert.dismiss()
        assert [path for _, path, _ in transport.calls] == [
            "/session/123/alert/accept",
            "/session/123/alert/dismiss",
        ]

    def test_text(self):
        transport = MockTransport(reply("Are you sure?"))
        assert Alert(transport, SESSION_ID).text() == '"Are you sure?"'

    def test_set_text(self):
        transport = MockTransport(reply(None))
        Alert(transport, SESSION_ID).set_text("yes")
        assert transport.last_call == ("POST", "/session/123/alert/text", {"text": "yes"})
