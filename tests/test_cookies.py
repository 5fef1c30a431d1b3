"""Tests for cookie and timeout commands"""

from datetime import timedelta

import pytest

from conftest import SESSION_ID, MockTransport, reply
from webdriver.cookies import Cookies
from webdriver.errors import InvalidCookieError, InvalidResponseError, TimeoutConfigurationError
from webdriver.models import Cookie
from webdriver.timeouts import Timeouts, to_millis


class TestCookies:
    """Test cookie commands."""

    def test_add_cookie_model(self):
        transport = MockTransport(reply(None))
        Cookies(transport, SESSION_ID).add(Cookie(name="token", value="abc", http_only=True))
        assert transport.last_call == (
            "POST",
            "/session/123/cookie",
            {"cookie": {"name": "token", "value": "abc", "httpOnly": True}},
        )

    def test_add_cookie_mapping(self):
        transport = MockTransport(reply(None))
        Cookies(transport, SESSION_ID).add({"name": "a", "value": "b", "path": "/"})
        assert transport.last_call[2] == {"cookie": {"name": "a", "value": "b", "path": "/"}}

    @pytest.mark.parametrize("cookie", [Cookie(name="a"), {"value": "b"}])
    def test_add_invalid_cookie(self, cookie):
        transport = MockTransport()
        with pytest.raises(InvalidCookieError):
            Cookies(transport, SESSION_ID).add(cookie)
        assert transport.calls == []

    def test_get_cookie(self):
        transport = MockTransport(reply({"name": "a", "value": "b", "sameSite": "Lax"}))
        cookie = Cookies(transport, SESSION_ID).get("a")
        assert transport.last_call == ("GET", "/session/123/cookie/a", None)
        assert cookie.same_site == "Lax"

    def test_all_cookies(self):
        transport = MockTransport(reply([{"name": "a", "value": "1"}, {"name": "b", "value": "2"}]))
        cookies = Cookies(transport, SESSION_ID).all()
        assert [c.name for c in cookies] == ["a", "b"]

    def test_all_cookies_bad_shape(self):
        transport = MockTransport(reply(["a"]))
        with pytest.raises(InvalidResponseError):
            Cookies(transport, SESSION_ID).all()

    def test_delete(self):
        transport = MockTransport()
        cookies = Cookies(transport, SESSION_ID)
        cookies.delete("a")
        cookies.delete_all()
        assert transport.calls == [
            ("DELETE", "/session/123/cookie/a", None),
            ("DELETE", "/session/123/cookie", None),
        ]


class TestTimeouts:
    """Test timeout commands."""

    def test_get(self):
        transport = MockTransport(reply({"implicit": 0, "pageLoad": 300000, "script": 30000}))
        timeout = Timeouts(transport, SESSION_ID).get()
        assert transport.last_call == ("GET", "/session/123/timeouts", None)
        assert timeout.page_load_duration == timedelta(minutes=5)

    def test_set_helpers(self):
        transport = MockTransport()
        timeouts = Timeouts(transport, SESSION_ID)
        timeouts.set_implicit(timedelta(seconds=2))
        timeouts.set_page_load(30)
        timeouts.set_script(0.25)
        assert [params for _, _, params in transport.calls] == [
            {"implicit": 2000},
            {"pageLoad": 30000},
            {"script": 250},
        ]

    def test_unknown_field(self):
        transport = MockTransport()
        with pytest.raises(TimeoutConfigurationError) as exc_info:
            Timeouts(transport, SESSION_ID).set("foo", 1)
        assert exc_info.value.field == "foo"
        assert transport.calls == []

    def test_to_millis(self):
        assert to_millis(timedelta(milliseconds=1500)) == 1500
        assert to_millis(1.0004) == 1000
        with pytest.raises(ValueError):
            to_millis(-1)
