import base64
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict

TTS_REG = ("auto", "alphabet", "auto-alphabet")
TTS_RDN = ("auto", "number", "string", "string-first")

# tte -> python codec used to encode the text before base64
TEXT_ENCODINGS = {
    "GB2312": "gb2312",
    "GBK": "gbk",
    "BIG5": "big5",
    "UNICODE": "utf-16-le",
    "GB18030": "gb18030",
    "UTF8": "utf-8",
}


def enum_index(value: Optional[str], choices) -> Optional[str]:
    """
    Map an enumeration name to its index as a string; None if unrecognized.

    Numeric strings that already are a valid index pass through unchanged.
    """
    if value is None:
        return None
    if value in choices:
        return str(choices.index(value))
    if value.isdigit() and int(value) < len(choices):
        return value
    return None


class TTSRequest(BaseModel):
    """One text-to-speech call: the text plus its ``business`` configuration."""

    model_config = ConfigDict(extra="forbid")

    text: str
    aue: str
    vcn: str
    sfl: Optional[int] = None
    auf: Optional[str] = None
    speed: Optional[int] = None
    volume: Optional[int] = None
    pitch: Optional[int] = None
    bgs: Optional[bool] = None
    tte: Literal["GB2312", "GBK", "BIG5", "UNICODE", "GB18030", "UTF8"] = "UTF8"
    reg: Optional[str] = None
    rdn: Optional[str] = None

    def business(self) -> Dict[str, Any]:
        business = self.model_dump(exclude={"text", "bgs", "reg", "rdn"}, exclude_none=True)
        if self.bgs is not None:
            business["bgs"] = 1 if self.bgs else 0
        reg = enum_index(self.reg, TTS_REG)
        if reg is not None:
            business["reg"] = reg
        rdn = enum_index(self.rdn, TTS_RDN)
        if rdn is not None:
            business["rdn"] = rdn
        return business

    def encoded_text(self) -> str:
        return base64.b64encode(self.text.encode(TEXT_ENCODINGS[self.tte])).decode("ascii")
