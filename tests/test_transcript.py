from __future__ import annotations

import json

from fakes import iat_frame
from xfvox.frames import decode_frame
from xfvox.stt.transcript import Transcript, frame_text


def _frame(*args, **kwargs):
    return decode_frame(json.dumps(iat_frame(*args, **kwargs)))


def test_frame_text_joins_top_candidates() -> None:
    assert frame_text(_frame(1, ["4月", "13日", "，"], 0)) == "4月13日，"


def test_frame_without_result_has_no_text() -> None:
    frame = decode_frame(json.dumps({"code": 0, "message": "", "data": {"status": 2}}))
    assert frame_text(frame) == ""
    transcript = Transcript()
    assert transcript.add(frame) == ""


def test_plain_results_are_concatenated() -> None:
    transcript = Transcript()
    transcript.add(_frame(1, ["中国", "台北"], 0))
    transcript.add(_frame(2, ["选手"], 1))
    transcript.add(_frame(3, ["。"], 2))
    assert transcript.text == "中国台北选手。"
    assert transcript.segments == ["中国台北", "选手", "。"]


def test_dynamic_correction_replaces_ranges() -> None:
    transcript = Transcript()
    transcript.add(_frame(1, ["今天"], 0, pgs="apd"))
    transcript.add(_frame(2, ["天"], 1, pgs="apd"))
    transcript.add(_frame(3, ["天气"], 1, pgs="apd"))
    assert transcript.text == "今天天天气"

    transcript.add(_frame(4, ["天气", "很好"], 1, pgs="rpl", rg=[2, 3]))
    assert transcript.text == "今天天气很好"

    transcript.add(_frame(5, ["。"], 2, pgs="apd"))
    assert transcript.text == "今天天气很好。"
