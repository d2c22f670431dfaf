"""Checks against the real service; skipped without XFYUN_* credentials."""

from __future__ import annotations

import os

import pytest

from xfvox.client import XFYun
from xfvox.config import XFYunConfig
from xfvox.core import ConfigError, HandshakeFailed, ProtocolError
from xfvox.helper import signer
from xfvox.utils.audio import read_pcm_chunks

REFERENCE_TRANSCRIPT = (
    "4月13日，中国台北选手戴资颖在比赛中发球，当日在新加坡室内体育场举行的新加坡羽毛球公开赛，"
    "女子单打半决赛中，中国台北选手戴资颖以2:1战胜日本选手山口茜，晋级决赛。"
)


@pytest.fixture
def client() -> XFYun:
    try:
        return XFYun(XFYunConfig.from_env())
    except ConfigError:
        pytest.skip("XFYUN_* credentials not configured")


@pytest.mark.live
@pytest.mark.asyncio
async def test_tts_reference_payload(client) -> None:
    audio = await client.synthesize(
        {"text": "你好, 你好, 你们好", "aue": "lame", "sfl": 1, "vcn": "xiaoyan"},
        timeout=10,
    )
    assert len(audio) == 15984


@pytest.mark.live
@pytest.mark.asyncio
async def test_iat_reference_transcript(client) -> None:
    sample = os.getenv("XFYUN_IAT_SAMPLE", "16k_10.pcm")
    if not os.path.exists(sample):
        pytest.skip(f"{sample} not found")

    transcript = await client.transcribe({
        "language": "zh_cn",
        "domain": "iat",
        "accent": "mandarin",
        "format": "audio/L16;rate=16000",
        "encoding": "raw",
        "audio": read_pcm_chunks(sample),
    }, timeout=10)

    assert transcript == REFERENCE_TRANSCRIPT


@pytest.mark.live
@pytest.mark.asyncio
async def test_stale_date_is_rejected(client, monkeypatch) -> None:
    monkeypatch.setattr(signer, "format_date", lambda now=None: "Mon, 01 Jan 2018 00:00:00 GMT")
    with pytest.raises((HandshakeFailed, ProtocolError)):
        await client.synthesize({"text": "hi", "aue": "raw", "vcn": "xiaoyan"}, timeout=10)
