"""Tests for webdriver.screen_capture module"""

import base64
import io

import pytest
from PIL import Image

from conftest import SESSION_ID, MockTransport, reply
from webdriver.errors import InvalidResponseError
from webdriver.screen_capture import Base64Stream, ScreenCapture, decode_screenshot
from webdriver.transport import Response


def png_bytes(size=(4, 3), color=(255, 0, 0)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()


class TestBase64Stream:
    """Test lazy base64 decoding."""

    def test_read_all(self):
        payload = bytes(range(256)) * 10
        stream = io.BufferedReader(Base64Stream(base64.b64encode(payload)))
        assert stream.read() == payload

    def test_small_reads(self):
        payload = b"The quick brown fox jumps over the lazy dog"
        stream = Base64Stream(base64.b64encode(payload))
        chunks = []
        buf = bytearray(5)
        while True:
            n = stream.readinto(buf)
            if not n:
                break
            chunks.append(bytes(buf[:n]))
        assert b"".join(chunks) == payload

    def test_invalid_base64(self):
        stream = io.BufferedReader(Base64Stream(b"!!!!"))
        with pytest.raises(InvalidResponseError):
            stream.read()


class TestDecodeScreenshot:
    """Test unwrapping of the screenshot reply."""

    def test_strips_quotes(self):
        resp = Response(value='"aGVsbG8="')
        assert decode_screenshot(resp).read() == b"hello"

    def test_empty_value(self):
        with pytest.raises(InvalidResponseError):
            decode_screenshot(Response(value=""))


class TestScreenCapture:
    """Test screenshot commands."""

    def test_take_decodes_png(self):
        data = png_bytes()
        transport = MockTransport(reply(base64.b64encode(data).decode("ascii")))

        stream = ScreenCapture(transport, SESSION_ID).take()

        assert transport.last_call == ("GET", "/session/123/screenshot", None)
        image = Image.open(io.BytesIO(stream.read()))
        assert image.format == "PNG"
        assert image.size == (4, 3)

    def test_take_element(self):
        transport = MockTransport(reply("aGk="))
        stream = ScreenCapture(transport, SESSION_ID).take_element("el-1")
        assert transport.last_call[1] == "/session/123/element/el-1/screenshot"
        assert stream.read() == b"hi"
