from typing import AsyncIterator, Iterable, Iterator, Union

import numpy as np
import soundfile as sf

from ..config import PCM_CHUNK_BYTES


def chunk_bytes(data: bytes, chunk_size: int = PCM_CHUNK_BYTES) -> Iterator[bytes]:
    """Slice a PCM buffer into upload-sized chunks (the last may be shorter)."""
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    for offset in range(0, len(data), chunk_size):
        yield data[offset:offset + chunk_size]


async def read_pcm_chunks(path, chunk_size: int = PCM_CHUNK_BYTES) -> AsyncIterator[bytes]:
    """
    Async chunk source over a raw PCM file, for ``XFYun.iat``.

    1280 bytes is 40ms of 16kHz 16-bit mono audio.
    """
    with open(path, "rb") as f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                break
            yield chunk


def load_pcm16(path, sample_rate: int = 16000) -> bytes:
    """
    Read an audio file (wav, flac, ...) as mono 16-bit PCM bytes.
    Multi-channel audio is averaged down to one channel.
    """
    audio, sr = sf.read(path, dtype="int16", always_2d=True)
    if sr != sample_rate:
        raise ValueError(f"expected {sample_rate}Hz audio, got {sr}Hz")
    if audio.shape[1] > 1:
        audio = audio.mean(axis=1).astype(np.int16)
    else:
        audio = audio[:, 0]
    return audio.tobytes()


def save_audio_stream(audio_chunks: Iterable[Union[bytes, np.ndarray]], file_path, sr: int = 16000):
    """
    Save chunks of PCM audio data as a valid WAV file.
    audio_chunks: Iterable of numpy arrays or raw PCM data (must be int16 format)
    """
    pending = b""
    with sf.SoundFile(file_path, mode='w', samplerate=sr, channels=1, subtype='PCM_16') as f:
        for chunk in audio_chunks:
            if isinstance(chunk, (bytes, bytearray)):
                # keep samples aligned when a chunk splits one in half
                pending += bytes(chunk)
                usable = len(pending) - len(pending) % 2
                chunk, pending = np.frombuffer(pending[:usable], dtype=np.int16), pending[usable:]
            f.write(chunk)
