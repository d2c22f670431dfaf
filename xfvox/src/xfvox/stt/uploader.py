# uploader.py
import asyncio
import base64
from typing import Any, AsyncIterable, AsyncIterator, Awaitable, Callable, Dict, Iterable, Optional, Union

from ..config import UPLOAD_INTERVAL_S
from ..core import FrameStatus

AudioSource = Union[AsyncIterable[bytes], Iterable[bytes]]


async def iter_chunks(source: AudioSource) -> AsyncIterator[bytes]:
    """Iterate a sync or async chunk source the same way."""
    if hasattr(source, "__aiter__"):
        async for chunk in source:
            yield chunk
    else:
        for chunk in source:
            yield chunk


class StreamingUploader:
    """
    Frames audio chunks for the recognition endpoint and sends them in order.

    The first frame has status 0 and carries ``business``; every later chunk
    has status 1. One trailing status-2 frame with empty audio marks the end
    of input. ``interval`` seconds are waited after each chunk so the upload
    never outruns the server's real-time ingestion.
    """

    def __init__(
        self,
        connection,
        business: Dict[str, Any],
        audio_format: str,
        encoding: str,
        interval: float = UPLOAD_INTERVAL_S,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.connection = connection
        self.business = business
        self.audio_format = audio_format
        self.encoding = encoding
        self.interval = interval
        self._sleep = sleep
        self.status = FrameStatus.FIRST
        self.chunks_sent = 0

    def _frame(self, status: FrameStatus, audio: str) -> Dict[str, Any]:
        frame: Dict[str, Any] = {
            "data": {
                "status": int(status),
                "format": self.audio_format,
                "encoding": self.encoding,
                "audio": audio,
            },
        }
        if self.status is FrameStatus.FIRST:
            frame["business"] = self.business
        return frame

    async def send_chunk(self, chunk: bytes) -> None:
        status = FrameStatus.FIRST if self.status is FrameStatus.FIRST else FrameStatus.CONTINUE
        await self.connection.send(self._frame(status, base64.b64encode(chunk).decode("ascii")))
        self.status = FrameStatus.CONTINUE
        self.chunks_sent += 1

    async def finish(self) -> None:
        await self.connection.send(self._frame(FrameStatus.LAST, ""))
        self.status = FrameStatus.LAST

    async def run(self, source: Optional[AudioSource]) -> int:
        """Upload every chunk of ``source``, then the end-of-input frame."""
        if source is not None:
            async for chunk in iter_chunks(source):
                if not chunk:
                    continue
                await self.send_chunk(bytes(chunk))
                await self._sleep(self.interval)
        await self.finish()
        self.connection.logger.debug("uploaded %d audio chunk(s)", self.chunks_sent)
        return self.chunks_sent
