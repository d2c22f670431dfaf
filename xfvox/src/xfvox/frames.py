import json
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from .core import FrameStatus, MalformedFrame, ProtocolError


class ResponseData(BaseModel):
    """Payload of a response; ``audio``/``result``/``ced`` etc. ride along as extras."""

    model_config = ConfigDict(extra="allow")

    status: FrameStatus


class ResponseFrame(BaseModel):
    model_config = ConfigDict(extra="allow")

    code: int
    message: str = ""
    data: Optional[ResponseData] = None
    sid: Optional[str] = None

    @property
    def status(self) -> FrameStatus:
        return self.data.status

    @property
    def is_final(self) -> bool:
        return self.data is not None and self.data.status == FrameStatus.LAST


def build_request(app_id: str, request: Dict[str, Any]) -> str:
    """Wrap ``{business?, data}`` in the wire envelope with the ``common`` block."""
    return json.dumps({"common": {"app_id": app_id}, **request}, ensure_ascii=False)


def decode_frame(raw: Union[str, bytes]) -> ResponseFrame:
    """
    Decode one inbound message.

    A nonzero ``code`` is checked before ``data`` is required, since failure
    responses usually carry no ``data`` block at all.
    """
    try:
        if isinstance(raw, (bytes, bytearray)):
            raw = raw.decode("utf-8")
        payload = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MalformedFrame(f"response is not valid JSON: {e}", raw) from e

    try:
        frame = ResponseFrame.model_validate(payload)
    except ValidationError as e:
        code = payload.get("code") if isinstance(payload, dict) else None
        if isinstance(code, int) and code != 0:
            # failure responses with a partial data block are still failures
            raise ProtocolError(code, str(payload.get("message", "")), frame=payload, sid=payload.get("sid")) from e
        raise MalformedFrame(f"response does not match the frame schema: {e}", raw) from e

    if frame.code != 0:
        raise ProtocolError(frame.code, frame.message, frame=frame, sid=frame.sid)
    if frame.data is None:
        raise MalformedFrame("success response without a data block", raw)
    return frame
