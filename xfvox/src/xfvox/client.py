# src/xfvox/client.py
import asyncio
import base64
import logging
from typing import AsyncIterator, Mapping, Optional, Union

import websockets

from .config import IAT_PATH, TTS_HOST, TTS_PATH, UPLOAD_INTERVAL_S, XFYunConfig
from .connection import XFYunConnection
from .core import ConnectionClosed, FrameStatus, TransportError, XFYunError
from .frames import ResponseFrame
from .helper.signer import build_auth_url
from .helper.ws import Connector
from .stt.request import IATRequest
from .stt.transcript import Transcript
from .stt.uploader import StreamingUploader
from .tts.request import TTSRequest


class XFYun:
    """
    Client for the XFYun websocket speech APIs.

    Every call opens exactly one connection and closes it when the call
    completes or fails; there is no pooling and no retry at this layer.
    """

    def __init__(
        self,
        config: Union[XFYunConfig, Mapping[str, str]],
        *,
        connector: Optional[Connector] = None,
        logger: Optional[logging.Logger] = None,
        upload_interval: float = UPLOAD_INTERVAL_S,
    ):
        if not isinstance(config, XFYunConfig):
            config = XFYunConfig(**config)
        self.config = config
        self.connector = connector or websockets.connect
        self.logger = logger or logging.getLogger("xfvox")
        self.upload_interval = upload_interval

    def get_ws_url(self, host: str, path: str) -> str:
        return build_auth_url(host, path, self.config.apikey, self.config.apisecret)

    async def connect(self, host: str, path: str, timeout: Optional[float] = None) -> XFYunConnection:
        """Open a signed connection; ``timeout`` (seconds) bounds the handshake."""
        connection = XFYunConnection(self.config.appid, self.get_ws_url(host, path), self.logger)
        return await connection.open(self.connector, timeout)

    async def _abort(self, connection: XFYunConnection) -> None:
        # best effort, the error that got us here is the one the caller sees
        try:
            await connection.close()
        except XFYunError as e:
            self.logger.warning("failed to close connection after error: %s", e)

    # ------------- text to speech ---------------------------------------------
    async def tts(
        self,
        request: Union[TTSRequest, Mapping],
        timeout: Optional[float] = None,
    ) -> AsyncIterator[bytes]:
        """
        Synthesize ``request.text`` and yield audio chunks as they arrive.

        The whole text goes out in a single status-2 frame.
        """
        if not isinstance(request, TTSRequest):
            request = TTSRequest.model_validate(request)
        business = request.business()
        self.logger.debug("tts request business data: %s", business)

        connection = await self.connect(TTS_HOST, TTS_PATH, timeout)
        try:
            await connection.send({
                "business": business,
                "data": {"text": request.encoded_text(), "status": int(FrameStatus.LAST)},
            })
            total = 0
            async for frame in connection:
                audio = base64.b64decode(getattr(frame.data, "audio", None) or "")
                total += len(audio)
                if audio:
                    yield audio
            self.logger.debug("tts finished, total bytes: %d", total)
        except BaseException:
            await self._abort(connection)
            raise
        await connection.close()

    async def synthesize(self, request: Union[TTSRequest, Mapping], timeout: Optional[float] = None) -> bytes:
        """Run ``tts`` to completion and return the whole audio payload."""
        return b"".join([chunk async for chunk in self.tts(request, timeout)])

    # ------------- speech recognition -----------------------------------------
    async def iat(
        self,
        request: Union[IATRequest, Mapping],
        timeout: Optional[float] = None,
    ) -> AsyncIterator[ResponseFrame]:
        """
        Stream ``request.audio`` for recognition and yield every response frame.

        Upload and receive run concurrently: the server pushes partial
        results while audio is still going up.
        """
        if not isinstance(request, IATRequest):
            request = IATRequest.model_validate(request)

        connection = await self.connect(request.host(), IAT_PATH, timeout)
        uploader = StreamingUploader(
            connection,
            request.business(),
            request.format,
            request.encoding,
            interval=self.upload_interval,
        )
        upload = asyncio.ensure_future(uploader.run(request.audio))
        aborting = []

        def upload_failure() -> Optional[BaseException]:
            if not upload.done() or upload.cancelled():
                return None
            error = upload.exception()
            return None if isinstance(error, ConnectionClosed) else error

        def _on_upload_done(task: asyncio.Task) -> None:
            if upload_failure() is not None:
                # nothing else would end the response stream
                aborting.append(asyncio.ensure_future(self._abort(connection)))

        upload.add_done_callback(_on_upload_done)

        try:
            try:
                async for frame in connection:
                    yield frame
            except TransportError:
                if upload_failure() is None:
                    raise
            failure = upload_failure()
            if failure is not None:
                raise failure
        except BaseException:
            await self._abort(connection)
            raise
        finally:
            if not upload.done():
                upload.cancel()
            await asyncio.gather(upload, *aborting, return_exceptions=True)
        await connection.close()

    async def transcribe(self, request: Union[IATRequest, Mapping], timeout: Optional[float] = None) -> str:
        """Run ``iat`` to completion and return the assembled transcript."""
        transcript = Transcript()
        async for frame in self.iat(request, timeout):
            transcript.add(frame)
        return transcript.text
