"""
Screenshot commands.

The remote end returns a base64 PNG as a JSON string. The payload is handed
back as a binary stream that decodes lazily while it is read.
"""

from __future__ import annotations

import base64
import io

from webdriver.commands import CommandSurface
from webdriver.errors import InvalidResponseError
from webdriver.transport import GET, Response

# base64 decodes in 4-character groups
_QUANTUM = 4


class Base64Stream(io.RawIOBase):
    """Read-only stream decoding standard base64 text on demand."""

    def __init__(self, encoded: bytes):
        self._source = io.BytesIO(encoded)
        self._pending = b""

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        size = len(buffer)
        while len(self._pending) < size:
            want = ((size - len(self._pending)) // 3 + 1) * _QUANTUM
            chunk = self._source.read(want)
            if not chunk:
                break
            self._pending += self._decode(chunk)
        n = min(size, len(self._pending))
        buffer[:n] = self._pending[:n]
        self._pending = self._pending[n:]
        return n

    def _decode(self, chunk: bytes) -> bytes:
        chunk = b"".join(chunk.split())
        rest = len(chunk) % _QUANTUM
        if rest:
            tail = self._source.read(_QUANTUM - rest)
            chunk += b"".join(tail.split())
        try:
            return base64.b64decode(chunk, validate=True)
        except ValueError as e:
            raise InvalidResponseError(f"screenshot is not valid base64: {e}") from e


def decode_screenshot(resp: Response) -> io.BufferedReader:
    """Strip the JSON quotes around ``value`` and wrap the rest in a decoder."""
    if not resp.value:
        raise InvalidResponseError("empty screenshot")
    payload = resp.value[1:-1].encode("ascii", "replace")
    return io.BufferedReader(Base64Stream(payload))


class ScreenCapture(CommandSurface):
    def take(self):
        """Capture the viewport; returns a readable stream of PNG bytes."""
        return self._call(GET, "/screenshot", None, decode_screenshot)

    def take_element(self, element_id: str):
        return self._call(GET, f"/element/{element_id}/screenshot", None, decode_screenshot)
