"""Navigation commands: load a URL, move through history, read URL and title."""

from webdriver.commands import CommandSurface, expect_success, raw_value
from webdriver.transport import GET, POST


class Navigation(CommandSurface):
    """
    Navigation commands of a session.

    ``get_current_url`` and ``get_title`` return the raw JSON text of the reply,
    so a W3C endpoint yields the string with its surrounding quotes.
    """

    def navigate_to(self, url: str):
        return self._call(POST, "/url", {"url": url}, expect_success)

    def get_current_url(self):
        return self._call(GET, "/url", None, raw_value)

    def back(self):
        return self._call(POST, "/back", None, expect_success)

    def forward(self):
        return self._call(POST, "/forward", None, expect_success)

    def refresh(self):
        return self._call(POST, "/refresh", None, expect_success)

    def get_title(self):
        return self._call(GET, "/title", None, raw_value)
