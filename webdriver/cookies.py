"""Cookie commands."""

from collections.abc import Mapping
from typing import Any

from webdriver.commands import CommandSurface, decode_list, decode_object, expect_success
from webdriver.errors import InvalidCookieError, InvalidResponseError
from webdriver.models import Cookie
from webdriver.transport import DELETE, GET, POST, Response


def _cookie(resp: Response) -> Cookie:
    return Cookie.model_validate(decode_object(resp))


def _cookies(resp: Response) -> list[Cookie]:
    items = decode_list(resp)
    if not all(isinstance(item, dict) for item in items):
        raise InvalidResponseError(f"expected cookie objects, got {resp.value!r}")
    return [Cookie.model_validate(item) for item in items]


class Cookies(CommandSurface):
    def all(self):
        return self._call(GET, "/cookie", None, _cookies)

    def get(self, name: str):
        return self._call(GET, f"/cookie/{name}", None, _cookie)

    def add(self, cookie: Cookie | Mapping[str, Any]):
        """
        Add a cookie to the current browsing context.

        Raises:
            InvalidCookieError: If the cookie has no name or no value
        """
        if isinstance(cookie, Cookie):
            if not cookie.is_valid():
                raise InvalidCookieError()
            payload = cookie.to_dict()
        else:
            if "name" not in cookie or "value" not in cookie:
                raise InvalidCookieError()
            payload = dict(cookie)
        return self._call(POST, "/cookie", {"cookie": payload}, expect_success)

    def delete(self, name: str):
        return self._call(DELETE, f"/cookie/{name}", None, expect_success)

    def delete_all(self):
        return self._call(DELETE, "/cookie", None, expect_success)
