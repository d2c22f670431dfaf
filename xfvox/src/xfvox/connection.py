import asyncio
import enum
import logging
from typing import Any, Dict, Optional

from websockets.exceptions import ConnectionClosed as WebSocketClosed
from websockets.exceptions import WebSocketException
from websockets.protocol import State

from .core import ConnectionClosed, ConnectionState, TransportError, XFYunError
from .frames import ResponseFrame, build_request, decode_frame
from .helper.ws import Connector, open_websocket


class StreamState(enum.Enum):
    LISTENING = "listening"
    DONE = "done"


class ResponseStream:
    """
    Lazy, finite sequence of decoded response frames for one connection.

    LISTENING until a frame with ``status == 2`` has been yielded, or the
    socket goes away, or a frame fails to decode; DONE after that, for good.
    Messages are pulled with ``recv()`` one at a time, so abandoning the
    stream leaves nothing subscribed on the socket.
    """

    def __init__(self, connection: "XFYunConnection"):
        self._connection = connection
        self.state = StreamState.LISTENING
        self.frames = 0

    def __aiter__(self):
        return self

    async def __anext__(self) -> ResponseFrame:
        if self.state is StreamState.DONE:
            raise StopAsyncIteration

        connection = self._connection
        try:
            raw = await connection.ws.recv()
        except (WebSocketException, OSError) as e:
            connection._on_transport_closed()
            if self.state is StreamState.DONE:
                # abandoned by close() while waiting
                raise StopAsyncIteration from e
            self.state = StreamState.DONE
            raise TransportError(
                f"socket closed after {self.frames} frame(s) without a final frame"
            ) from e
        except asyncio.CancelledError:
            self.state = StreamState.DONE
            raise

        try:
            frame = decode_frame(raw)
        except XFYunError:
            self.state = StreamState.DONE
            raise

        self.frames += 1
        if frame.is_final:
            self.state = StreamState.DONE
        connection.logger.debug("frame %d status=%s sid=%s", self.frames, frame.status, frame.sid)
        return frame

    def abandon(self) -> None:
        self.state = StreamState.DONE

    async def aclose(self) -> None:
        self.abandon()


class XFYunConnection:
    """
    One authenticated websocket to an XFYun endpoint.

    State only moves forward: CONNECTING -> OPEN -> CLOSING -> CLOSED, or
    CONNECTING -> CLOSED when the handshake fails.
    """

    def __init__(self, app_id: str, url: str, logger: Optional[logging.Logger] = None):
        self.app_id = app_id
        self.url = url
        self.logger = logger or logging.getLogger("xfvox")
        self.ws = None
        self.state = ConnectionState.CONNECTING
        self._responses: Optional[ResponseStream] = None
        self._closing: Optional[asyncio.Future] = None

    def _transition(self, state: ConnectionState) -> None:
        if state < self.state:
            raise RuntimeError(f"connection cannot go from {self.state.name} back to {state.name}")
        self.state = state

    def _on_transport_closed(self) -> None:
        # a close() in progress finishes the transition itself
        if self.state is ConnectionState.OPEN:
            self.logger.debug("socket closed by peer")
            self._transition(ConnectionState.CLOSED)

    async def open(self, connector: Optional[Connector] = None, timeout: Optional[float] = None) -> "XFYunConnection":
        if self.state is not ConnectionState.CONNECTING:
            raise RuntimeError("connection was already opened")
        try:
            self.ws = await open_websocket(self.url, connector, timeout)
        except BaseException:
            self.logger.error("failed to connect to %s", self.url.split("?", 1)[0])
            self._transition(ConnectionState.CLOSED)
            raise
        self._transition(ConnectionState.OPEN)
        self.logger.debug("connected to %s", self.url.split("?", 1)[0])
        return self

    @property
    def is_open(self) -> bool:
        if self.state is ConnectionState.OPEN and getattr(self.ws, "state", State.OPEN) is State.CLOSED:
            self._on_transport_closed()
        return self.state is ConnectionState.OPEN

    async def send(self, request: Dict[str, Any]) -> None:
        """Send ``{business?, data}``; the ``common`` block is added here."""
        if not self.is_open:
            raise ConnectionClosed(f"cannot send, connection is {self.state.name}")
        payload = build_request(self.app_id, request)
        try:
            await self.ws.send(payload)
        except WebSocketClosed as e:
            self._on_transport_closed()
            raise ConnectionClosed("socket closed while sending") from e

    def responses(self) -> ResponseStream:
        if self._responses is None:
            self._responses = ResponseStream(self)
        return self._responses

    def __aiter__(self) -> ResponseStream:
        return self.responses()

    async def close(self) -> None:
        """Close the socket and wait for the close handshake. Safe to call repeatedly."""
        if self.state is ConnectionState.CLOSED:
            return
        if self.ws is None:
            self._transition(ConnectionState.CLOSED)
            return
        if self._closing is None:
            if self._responses is not None:
                self._responses.abandon()
            self._transition(ConnectionState.CLOSING)
            self._closing = asyncio.ensure_future(self._close_transport())
        await asyncio.shield(self._closing)

    async def _close_transport(self) -> None:
        try:
            await self.ws.close()
        except (WebSocketException, OSError) as e:
            raise TransportError(f"error while closing: {e}") from e
        finally:
            self._transition(ConnectionState.CLOSED)
            self.logger.debug("connection closed")

    async def __aenter__(self) -> "XFYunConnection":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
