"""
backend/tests/conftest.py

Purpose:
    Shared pytest bootstrap: import path for the backend package, explicit
    test settings and a recording fake of the upstream provider.
"""

from __future__ import annotations

import sys
from pathlib import Path

import httpx
import pytest

_THIS_FILE = Path(__file__).resolve()
_BACKEND_DIR = _THIS_FILE.parents[1]

if str(_BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(_BACKEND_DIR))

from odds_gpt.config import Settings  # noqa: E402
from odds_gpt.main import create_app  # noqa: E402
from odds_gpt.providers.http_client import UpstreamClient  # noqa: E402
from odds_gpt.providers.odds_api import TheOddsAPIForwarder  # noqa: E402


def make_settings(**overrides) -> Settings:
    values = {
        "ODDS_API_KEY": "upstream-key",
        "BACKEND_API_KEY": "",
        "CORS_ORIGIN": "*",
        "PUBLIC_BASE_URL": "",
        "ODDS_API_BASE_URL": "https://api.the-odds-api.com/v4",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FakeUpstream:
    """Records outbound requests and answers each with a fixed response."""

    def __init__(self, status_code: int = 200, body: str | bytes = "[]", headers: dict | None = None):
        self.status_code = status_code
        self.body = body
        self.headers = headers or {}
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        content = self.body.encode() if isinstance(self.body, str) else self.body
        return httpx.Response(self.status_code, content=content, headers=self.headers)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def forwarder(self, settings: Settings) -> TheOddsAPIForwarder:
        client = UpstreamClient("odds_api", transport=httpx.MockTransport(self.handler))
        return TheOddsAPIForwarder(settings, client=client)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def build_client(upstream):
    from fastapi.testclient import TestClient

    def _build(**overrides) -> TestClient:
        cfg = make_settings(**overrides)
        return TestClient(create_app(cfg, forwarder=upstream.forwarder(cfg)))

    return _build


@pytest.fixture
def settings_factory():
    return make_settings
