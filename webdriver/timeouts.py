"""Session timeout commands."""

from datetime import timedelta

from webdriver.commands import CommandSurface, decode_object, expect_success
from webdriver.errors import TimeoutConfigurationError
from webdriver.models import Timeout
from webdriver.transport import GET, POST, Response

IMPLICIT = "implicit"
PAGE_LOAD = "pageLoad"
SCRIPT = "script"

TIMEOUT_FIELDS = (IMPLICIT, PAGE_LOAD, SCRIPT)


def to_millis(duration: timedelta | float) -> int:
    """Convert a ``timedelta`` or seconds to whole milliseconds."""
    if isinstance(duration, timedelta):
        seconds = duration.total_seconds()
    else:
        seconds = float(duration)
    if seconds < 0:
        raise ValueError(f"timeout must not be negative: {duration}")
    return round(seconds * 1000)


def _timeout(resp: Response) -> Timeout:
    return Timeout.model_validate(decode_object(resp))


class Timeouts(CommandSurface):
    def get(self):
        return self._call(GET, "/timeouts", None, _timeout)

    def set(self, field: str, duration: timedelta | float):
        """
        Set one timeout.

        Args:
            field: "implicit", "pageLoad" or "script"
            duration: timedelta or seconds

        Raises:
            TimeoutConfigurationError: If ``field`` is not a known timeout
        """
        if field not in TIMEOUT_FIELDS:
            raise TimeoutConfigurationError(field)
        return self._call(POST, "/timeouts", {field: to_millis(duration)}, expect_success)

    def set_implicit(self, duration: timedelta | float):
        return self.set(IMPLICIT, duration)

    def set_page_load(self, duration: timedelta | float):
        return self.set(PAGE_LOAD, duration)

    def set_script(self, duration: timedelta | float):
        return self.set(SCRIPT, duration)
