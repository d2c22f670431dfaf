# iat_from_file.py
import argparse
import asyncio
import logging

from xfvox.client import XFYun
from xfvox.config import XFYunConfig
from xfvox.stt.transcript import Transcript
from xfvox.utils.audio import chunk_bytes, load_pcm16, read_pcm_chunks


async def main(args):
    xfyun = XFYun(XFYunConfig.from_env())
    if args.path.endswith(".pcm"):
        audio = read_pcm_chunks(args.path)
    else:
        audio = chunk_bytes(load_pcm16(args.path))

    transcript = Transcript()
    async for frame in xfyun.iat({
        "language": "zh_cn",
        "domain": "iat",
        "accent": "mandarin",
        "dwa": "wpgs",
        "format": "audio/L16;rate=16000",
        "encoding": "raw",
        "audio": audio,
    }):
        print("📝", transcript.add(frame))

    print(transcript.text)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Transcribe a 16kHz recording with XFYun IAT")
    parser.add_argument("path", help="raw 16kHz 16-bit mono .pcm, or any file soundfile can read")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    asyncio.run(main(args))
