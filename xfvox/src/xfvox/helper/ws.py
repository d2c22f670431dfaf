# ws.py
import asyncio
from typing import Any, Awaitable, Callable, Optional

import websockets
from websockets.exceptions import WebSocketException

from ..core import HandshakeFailed

Connector = Callable[..., Awaitable[Any]]


async def open_websocket(
    url: str,
    connector: Optional[Connector] = None,
    timeout: Optional[float] = None,
    **options: Any,
):
    """
    Open a websocket and wait until it is usable.

    Socket errors, HTTP rejections of the upgrade (e.g. an expired date in a
    signed url) and timeouts all surface as ``HandshakeFailed``. On timeout
    the pending open is cancelled, which abandons the half-open socket.
    """
    connector = connector or websockets.connect
    try:
        if timeout is None:
            return await connector(url, **options)
        return await asyncio.wait_for(connector(url, **options), timeout)
    except asyncio.TimeoutError as e:
        raise HandshakeFailed(f"handshake timed out after {timeout}s") from e
    except (OSError, WebSocketException) as e:
        raise HandshakeFailed(f"handshake failed: {e}") from e
