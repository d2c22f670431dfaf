# microphone.py
import asyncio
from typing import AsyncIterator, Optional

import sounddevice as sd

from ..config import PCM_CHUNK_BYTES

_END = object()


async def microphone_chunks(
    sample_rate: int = 16000,
    chunk_bytes: int = PCM_CHUNK_BYTES,
    duration: Optional[float] = None,
    stop: Optional[asyncio.Event] = None,
) -> AsyncIterator[bytes]:
    """
    Capture mono int16 PCM from the default input device.

    Yields chunks at the device's real-time rate until ``duration`` seconds
    have passed or ``stop`` is set, so it can feed ``XFYun.iat`` directly.
    """
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue = asyncio.Queue()

    def callback(indata, frames, time_info, status):
        loop.call_soon_threadsafe(queue.put_nowait, bytes(indata))

    async def _deadline():
        if duration is not None:
            await asyncio.sleep(duration)
        elif stop is not None:
            await stop.wait()
        else:
            return
        queue.put_nowait(_END)

    blocksize = chunk_bytes // 2
    watcher = asyncio.ensure_future(_deadline())
    try:
        with sd.RawInputStream(samplerate=sample_rate, channels=1, dtype="int16",
                               blocksize=blocksize, callback=callback):
            while True:
                item = await queue.get()
                if item is _END:
                    break
                yield item
    finally:
        watcher.cancel()
