# signer.py
import base64
import hashlib
import hmac
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Optional
from urllib.parse import urlencode

ALGORITHM = "hmac-sha256"
SIGNED_HEADERS = "host date request-line"


def format_date(now: Optional[datetime] = None) -> str:
    """RFC 1123 date in GMT, e.g. ``Fri, 16 Oct 2026 12:00:00 GMT``."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return format_datetime(now.astimezone(timezone.utc), usegmt=True)


def signature_origin(host: str, date: str, path: str) -> str:
    return f"host: {host}\ndate: {date}\nGET {path} HTTP/1.1"


def sign(api_secret: str, origin: str) -> str:
    digest = hmac.new(api_secret.encode("utf-8"), origin.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def authorization(api_key: str, signature: str) -> str:
    origin = (
        f'api_key="{api_key}",algorithm="{ALGORITHM}",'
        f'headers="{SIGNED_HEADERS}",signature="{signature}"'
    )
    return base64.b64encode(origin.encode("utf-8")).decode("ascii")


def build_auth_url(
    host: str,
    path: str,
    api_key: str,
    api_secret: str,
    now: Optional[datetime] = None,
) -> str:
    """
    Build the signed ``wss://`` url for one connection attempt.

    The date is part of the signed material and the server rejects stale
    ones, so a url must never be reused across attempts.
    """
    date = format_date(now)
    signature = sign(api_secret, signature_origin(host, date, path))
    query = urlencode({
        "host": host,
        "date": date,
        "authorization": authorization(api_key, signature),
    })
    return f"wss://{host}{path}?{query}"
