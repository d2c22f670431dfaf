from typing import Any, Dict, List, Optional


def _result(frame) -> Optional[Dict[str, Any]]:
    data = getattr(frame, "data", None)
    if data is None:
        return None
    result = getattr(data, "result", None)
    return result if isinstance(result, dict) else None


def frame_text(frame) -> str:
    """Text of one recognition frame: the top candidate of every word."""
    result = _result(frame)
    if result is None:
        return ""
    return "".join(
        word["cw"][0].get("w", "")
        for word in result.get("ws", [])
        if word.get("cw")
    )


class Transcript:
    """
    Assembles recognition frames into the running text.

    Frames are keyed by their ``sn``. With dynamic correction enabled
    (``dwa="wpgs"``) a frame with ``pgs == "rpl"`` replaces the segments
    ``rg[0]..rg[1]``; otherwise segments are appended.
    """

    def __init__(self):
        self._segments: Dict[int, str] = {}
        self._next_sn = 1

    def add(self, frame) -> str:
        result = _result(frame)
        if result is None:
            return self.text

        sn = result.get("sn")
        if not isinstance(sn, int):
            sn = self._next_sn
        self._next_sn = sn + 1

        if result.get("pgs") == "rpl":
            start, end = result.get("rg", [sn, sn])
            for replaced in range(start, end + 1):
                self._segments.pop(replaced, None)

        self._segments[sn] = frame_text(frame)
        return self.text

    @property
    def segments(self) -> List[str]:
        return [self._segments[sn] for sn in sorted(self._segments)]

    @property
    def text(self) -> str:
        return "".join(self.segments)
