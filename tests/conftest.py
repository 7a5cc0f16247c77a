"""
Shared fixtures: injected settings and a scripted upstream transport.
"""

import base64
import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from food_guess.core.config import Settings, get_settings
from food_guess.core.dependencies import get_http_client
from food_guess.main import app

OATMEAL_OUTPUT = {
    "items": [
        {
            "name": "oatmeal",
            "grams": 250,
            "nutrients": {"calories": 180, "protein_g": 6, "carbs_g": 32, "fat_g": 3},
        }
    ]
}


def make_image_base64(length: int = 600) -> str:
    """Valid base64 text of exactly the given length (multiple of 4)."""
    raw = bytes(range(256)) * (length // 256 + 1)
    return base64.b64encode(raw)[:length].decode("ascii")


class UpstreamStub:
    """Scripted stand-in for the inference API that records every request."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]):
        self.respond = respond
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)

    @property
    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)

    @classmethod
    def returning_text(cls, text: str, status_code: int = 200) -> "UpstreamStub":
        return cls(lambda request: httpx.Response(status_code, json={"output_text": text}))

    @classmethod
    def returning_output(cls, output: Any) -> "UpstreamStub":
        return cls.returning_text(json.dumps(output))

    @classmethod
    def forbidden(cls) -> "UpstreamStub":
        def fail(request: httpx.Request) -> httpx.Response:
            pytest.fail(f"Upstream must not be called, got {request.method} {request.url}")
        return cls(fail)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, OPENAI_API_KEY="sk-test", CORS_ORIGINS=["*"])


@pytest.fixture
def image_base64() -> str:
    return make_image_base64()


@pytest.fixture
def make_client(settings: Settings):
    """
    Build a TestClient wired to the given upstream stub.

    Usage:
        client = make_client(UpstreamStub.returning_output(...))
        client = make_client(stub, settings=other_settings)
    """
    def _make(stub: UpstreamStub, settings: Optional[Settings] = None) -> TestClient:
        active_settings = settings or default_settings

        async def override_http_client() -> httpx.AsyncClient:
            return httpx.AsyncClient(transport=httpx.MockTransport(stub))

        app.dependency_overrides[get_settings] = lambda: active_settings
        app.dependency_overrides[get_http_client] = override_http_client
        return TestClient(app)

    default_settings = settings
    yield _make
    app.dependency_overrides.clear()
