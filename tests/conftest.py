from __future__ import annotations

import logging

import pytest

from fakes import FakeConnector, FakeWebSocket
from xfvox.client import XFYun

CREDENTIALS = {"appid": "appid123", "apikey": "key456", "apisecret": "secret789"}


@pytest.fixture
def credentials() -> dict:
    return dict(CREDENTIALS)


@pytest.fixture
def make_client(credentials):
    def _make(ws: FakeWebSocket, **kwargs) -> tuple[XFYun, FakeConnector]:
        connector = FakeConnector(ws)
        kwargs.setdefault("upload_interval", 0.0)
        client = XFYun(credentials, connector=connector, logger=logging.getLogger("xfvox.test"), **kwargs)
        return client, connector

    return _make
