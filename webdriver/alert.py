"""User prompt (alert, confirm, prompt) commands."""

from webdriver.commands import CommandSurface, expect_success, raw_value
from webdriver.transport import GET, POST


class Alert(CommandSurface):
    def dismiss(self):
        return self._call(POST, "/alert/dismiss", None, expect_success)

    def accept(self):
        return self._call(POST, "/alert/accept", None, expect_success)

    def text(self):
        """Return the raw JSON text of the prompt message."""
        return self._call(GET, "/alert/text", None, raw_value)

    def set_text(self, text: str):
        return self._call(POST, "/alert/text", {"text": text}, expect_success)
