# src/xfvox/core.py
import enum
from typing import Any, Optional


class XFYunError(Exception):
    """Base exception for xfvox client errors."""


class ConfigError(XFYunError):
    """Credentials could not be loaded."""


class HandshakeFailed(XFYunError):
    """The websocket could not be opened (socket error, rejection or timeout)."""


class ConnectionClosed(XFYunError):
    """A frame was sent on a connection that is not open."""


class TransportError(XFYunError):
    """The socket closed or failed before the final frame arrived."""


class MalformedFrame(XFYunError):
    """An inbound message is not valid JSON or misses required fields."""

    def __init__(self, reason: str, raw: Any = None):
        super().__init__(reason)
        self.raw = raw


class ProtocolError(XFYunError):
    """
    The server answered with a nonzero ``code``.

    ``frame`` is the decoded response (a ``ResponseFrame``) that carried it.
    """

    def __init__(self, code: int, message: str, frame: Any = None, sid: Optional[str] = None):
        super().__init__(f"[{code}] {message}" + (f" (sid={sid})" if sid else ""))
        self.code = code
        self.message = message
        self.frame = frame
        self.sid = sid


class ConnectionState(enum.IntEnum):
    CONNECTING = 0
    OPEN = 1
    CLOSING = 2
    CLOSED = 3


class FrameStatus(enum.IntEnum):
    FIRST = 0
    CONTINUE = 1
    LAST = 2
