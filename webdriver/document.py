"""Page source and script execution."""

from typing import Any

from webdriver.commands import CommandSurface, raw_value
from webdriver.elements import WebElement
from webdriver.transport import GET, POST


def _script_args(args: list[Any] | None) -> list[Any]:
    return [a.to_reference() if isinstance(a, WebElement) else a for a in (args or [])]


class Document(CommandSurface):
    def get_page_source(self):
        """Return the raw JSON text of the page source reply."""
        return self._call(GET, "/source", None, raw_value)

    def execute_script(self, script: str, args: list[Any] | None = None):
        """
        Run a synchronous script in the current browsing context.

        Args:
            script: Function body; ``arguments`` holds ``args``
            args: JSON-serializable arguments; ``WebElement`` values are sent as references

        Returns:
            The raw JSON text of the script result, e.g. ``'{"a":1}'`` or ``"null"``.
            Decode it with ``json.loads``.
        """
        params = {"script": script, "args": _script_args(args)}
        return self._call(POST, "/execute/sync", params, raw_value)

    def execute_async_script(self, script: str, args: list[Any] | None = None):
        params = {"script": script, "args": _script_args(args)}
        return self._call(POST, "/execute/async", params, raw_value)
