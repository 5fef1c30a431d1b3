"""
WebDriver session: capability negotiation and the per-session command surfaces.
"""

from __future__ import annotations

from webdriver.alert import Alert
from webdriver.capabilities import Capabilities
from webdriver.commands import decode_object, expect_success, resolve
from webdriver.context import Context
from webdriver.cookies import Cookies
from webdriver.document import Document
from webdriver.elements import Elements
from webdriver.errors import InvalidResponseError, UnknownSessionError
from webdriver.models import Status
from webdriver.navigation import Navigation
from webdriver.options import BrowserOptions
from webdriver.screen_capture import ScreenCapture
from webdriver.timeouts import Timeouts
from webdriver.transport import DELETE, GET, POST, Response, Transport


def _status(resp: Response) -> Status:
    return Status.model_validate(decode_object(resp))


class Session:
    """
    An open WebDriver session.

    Create one with ``Session.create``. With ``HttpTransport`` every command
    returns its result directly; with ``AsyncHttpTransport`` every command
    (including ``create``) must be awaited.

    Example:
        >>> transport = HttpTransport(HttpClient("127.0.0.1:9515"))
        >>> session = Session.create(transport, ChromeOptions().build())
        >>> session.navigation.navigate_to("https://example.com")
        >>> session.delete()
    """

    def __init__(self, transport: Transport, session_id: str, capabilities: Capabilities):
        if not session_id:
            raise UnknownSessionError()
        self._transport = transport
        self._id = session_id
        self._capabilities = capabilities

        self.navigation = Navigation(transport, session_id)
        self.context = Context(transport, session_id)
        self.cookies = Cookies(transport, session_id)
        self.timeouts = Timeouts(transport, session_id)
        self.elements = Elements(transport, session_id)
        self.document = Document(transport, session_id)
        self.screen_capture = ScreenCapture(transport, session_id)
        self.alert = Alert(transport, session_id)

    @property
    def id(self) -> str:
        return self._id

    @property
    def transport(self) -> Transport:
        return self._transport

    def __repr__(self) -> str:
        return f"Session(id={self._id!r})"

    @classmethod
    def create(cls, transport: Transport, options: BrowserOptions):
        """
        Open a new session.

        Sends ``{"capabilities": {"alwaysMatch": ..., "firstMatch": [...]}}`` to
        POST /session.

        Raises:
            InvalidResponseError: The reply value is not an object
            UnknownSessionError: The reply carries no session id
            ProtocolError: The remote end refused the capabilities
        """
        params = {"capabilities": options.to_params()}

        def handler(resp: Response) -> Session:
            value = decode_object(resp)
            # JSON-Wire replies carry the id in the envelope, W3C ones in value
            session_id = value.get("sessionId") or resp.session_id
            if not session_id:
                raise UnknownSessionError()
            if not isinstance(session_id, str):
                raise InvalidResponseError(f"session id is not a string: {session_id!r}")
            caps = value.get("capabilities")
            if not isinstance(caps, dict):
                # legacy dialect puts capabilities directly in value
                caps = {k: v for k, v in value.items() if k != "sessionId"}
            return cls(transport, session_id, Capabilities(caps))

        return resolve(transport.do(POST, "/session", params), handler)

    def capabilities(self) -> Capabilities:
        """Capabilities the remote end agreed to."""
        return self._capabilities

    def status(self):
        """Readiness of the remote end (GET /status)."""
        return resolve(self._transport.do(GET, "/status"), _status)

    def delete(self):
        """End the session (DELETE /session/{id})."""
        return resolve(self._transport.do(DELETE, f"/session/{self._id}"), expect_success)
