from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config import IAT_HOST, IAT_NICHE_HOST

DATA_FIELDS = {"type", "format", "encoding", "audio"}


class IATRequest(BaseModel):
    """
    One streaming recognition call.

    ``audio`` is the chunk source: an async iterable or plain iterable of
    ``bytes``. Everything except ``type``/``format``/``encoding``/``audio``
    is the ``business`` block of the first upload frame.
    """

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    type: Literal["default", "niche"] = "default"

    language: str
    domain: str
    accent: str
    vad_eos: Optional[int] = None
    dwa: Optional[Literal["wpgs"]] = None
    pd: Optional[str] = None
    ptt: Optional[Literal[0, 1]] = None
    rlang: Optional[str] = None
    vinfo: Optional[Literal[0, 1]] = None
    nunum: Optional[Literal[0, 1]] = None
    speex_size: Optional[int] = None
    nbest: Optional[int] = None
    wbest: Optional[int] = None

    format: str
    encoding: str
    audio: Any = Field(default=None, exclude=True, repr=False)

    def host(self) -> str:
        return IAT_NICHE_HOST if self.type == "niche" else IAT_HOST

    def business(self) -> Dict[str, Any]:
        return self.model_dump(exclude=DATA_FIELDS, exclude_none=True)
