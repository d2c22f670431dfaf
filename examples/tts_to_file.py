# tts_to_file.py
import argparse
import asyncio
import logging

from xfvox.client import XFYun
from xfvox.config import XFYunConfig
from xfvox.utils.audio import save_audio_stream


async def main(args):
    xfyun = XFYun(XFYunConfig.from_env())
    request = {"text": args.text, "vcn": args.voice, "aue": args.aue}
    if args.aue == "lame":
        request["sfl"] = 1

    if args.aue == "raw":
        chunks = [chunk async for chunk in xfyun.tts(request)]
        save_audio_stream(chunks, args.output, sr=16000)
        print(f"wrote {sum(map(len, chunks))} bytes of PCM to {args.output}")
    else:
        audio = await xfyun.synthesize(request)
        with open(args.output, "wb") as f:
            f.write(audio)
        print(f"wrote {len(audio)} bytes to {args.output}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Synthesize text with XFYun TTS")
    parser.add_argument("text")
    parser.add_argument("-o", "--output", default="tts.mp3")
    parser.add_argument("--voice", default="xiaoyan")
    parser.add_argument("--aue", default="lame", choices=["lame", "raw"])
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    asyncio.run(main(args))
