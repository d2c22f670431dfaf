import os

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict

from .core import ConfigError

TTS_HOST = "tts-api.xfyun.cn"
TTS_PATH = "/v2/tts"

IAT_HOST = "iat-api.xfyun.cn"
IAT_NICHE_HOST = "iat-niche-api.xfyun.cn"
IAT_PATH = "/v2/iat"

# 40ms of 16kHz 16-bit mono audio per upload frame
UPLOAD_INTERVAL_S = 0.04
PCM_CHUNK_BYTES = 1280


class XFYunConfig(BaseModel):
    """Application credentials issued by the XFYun console."""

    model_config = ConfigDict(frozen=True)

    appid: str
    apisecret: str
    apikey: str

    @classmethod
    def from_env(cls, prefix: str = "XFYUN_") -> "XFYunConfig":
        """
        Load credentials from the environment (and the nearest ``.env`` file
        above the working directory, if any).

        Reads ``{prefix}APPID``, ``{prefix}API_KEY`` and ``{prefix}API_SECRET``.
        """
        load_dotenv(find_dotenv(usecwd=True))
        names = {
            "appid": f"{prefix}APPID",
            "apikey": f"{prefix}API_KEY",
            "apisecret": f"{prefix}API_SECRET",
        }
        values = {field: os.getenv(env, "").strip() for field, env in names.items()}
        missing = [names[field] for field, value in values.items() if not value]
        if missing:
            raise ConfigError(f"missing credentials: {', '.join(missing)}")
        return cls(**values)
