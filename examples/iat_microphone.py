# iat_microphone.py
import argparse
import asyncio

from xfvox.client import XFYun
from xfvox.config import XFYunConfig
from xfvox.stt.microphone import microphone_chunks
from xfvox.stt.transcript import Transcript


async def main(seconds: float):
    xfyun = XFYun(XFYunConfig.from_env())
    transcript = Transcript()
    print("🎤 Microphone streaming started")
    async for frame in xfyun.iat({
        "language": "zh_cn",
        "domain": "iat",
        "accent": "mandarin",
        "dwa": "wpgs",
        "vad_eos": 3000,
        "format": "audio/L16;rate=16000",
        "encoding": "raw",
        "audio": microphone_chunks(duration=seconds),
    }):
        print("📝", transcript.add(frame))


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--seconds", type=float, default=10.0)
    asyncio.run(main(parser.parse_args().seconds))
