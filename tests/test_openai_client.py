"""
Tests for the inference API client.
"""

import httpx
import pytest

from food_guess.clients import openai_client
from food_guess.core.config import Settings
from food_guess.core.errors import ConfigurationError, FormatError, UpstreamError
from tests.conftest import UpstreamStub


# ============================================================================
# Payload
# ============================================================================

@pytest.mark.parametrize("prefix", ["data:image/png;base64,", "data:image/jpeg;base64,", ""])
def test_strip_data_url_prefix(prefix):
    assert openai_client.strip_data_url_prefix(f"{prefix}QUJD") == "QUJD"


def test_strip_only_removes_leading_prefix():
    value = "QUJDdata:image/png;base64,"

    assert openai_client.strip_data_url_prefix(value) == value


def test_build_payload_reencodes_image_as_jpeg():
    payload = openai_client.build_payload("find food", "data:image/webp;base64,QUJD", "gpt-4.1-mini")

    assert payload == {
        "model": "gpt-4.1-mini",
        "input": [
            {
                "role": "user",
                "content": [
                    {"type": "input_text", "text": "find food"},
                    {"type": "input_image", "image_url": "data:image/jpeg;base64,QUJD"},
                ],
            }
        ],
        "text": {"format": {"type": "json_object"}},
    }


# ============================================================================
# Output text lookup
# ============================================================================

def test_extract_prefers_output_text():
    envelope = {
        "output_text": "direct",
        "output": [{"type": "message", "content": [{"text": "nested"}]}],
    }

    assert openai_client.extract_output_text(envelope) == "direct"


def test_extract_uses_first_message_entry():
    envelope = {
        "output": [
            {"type": "reasoning", "content": [{"text": "thinking"}]},
            {"type": "message", "content": [{"text": "first"}, {"text": "second"}]},
            {"type": "message", "content": [{"text": "later"}]},
        ]
    }

    assert openai_client.extract_output_text(envelope) == "first"


@pytest.mark.parametrize("envelope", [
    {},
    {"output": []},
    {"output": [{"type": "reasoning"}]},
    {"output": [{"type": "message", "content": []}]},
    {"output": [{"type": "message", "content": [{"type": "refusal"}]}]},
    {"output_text": None, "output": None},
])
def test_extract_falls_back_to_empty_string(envelope):
    assert openai_client.extract_output_text(envelope) == ""


# ============================================================================
# Request
# ============================================================================

@pytest.mark.anyio
async def test_request_guess_returns_envelope(settings):
    stub = UpstreamStub.returning_text('{"items": []}')

    async with httpx.AsyncClient(transport=httpx.MockTransport(stub)) as client:
        envelope = await openai_client.request_guess(client, settings, "prompt", "QUJD" * 30)

    assert envelope == {"output_text": '{"items": []}'}
    assert stub.last_json["model"] == settings.OPENAI_MODEL


@pytest.mark.anyio
async def test_request_guess_uses_configured_endpoint_and_model():
    settings = Settings(
        _env_file=None,
        OPENAI_API_KEY="sk-other",
        OPENAI_API_URL="https://inference.internal/v1/responses",
        OPENAI_MODEL="gpt-4.1"
    )
    stub = UpstreamStub.returning_text("{}")

    async with httpx.AsyncClient(transport=httpx.MockTransport(stub)) as client:
        await openai_client.request_guess(client, settings, "prompt", "QUJD")

    assert str(stub.requests[0].url) == "https://inference.internal/v1/responses"
    assert stub.requests[0].headers["authorization"] == "Bearer sk-other"
    assert stub.last_json["model"] == "gpt-4.1"


@pytest.mark.anyio
async def test_request_guess_without_key_makes_no_call():
    stub = UpstreamStub.forbidden()

    async with httpx.AsyncClient(transport=httpx.MockTransport(stub)) as client:
        with pytest.raises(ConfigurationError, match="Missing OPENAI_API_KEY"):
            await openai_client.request_guess(client, Settings(_env_file=None, OPENAI_API_KEY=""), "p", "QUJD")

    assert stub.requests == []


@pytest.mark.anyio
async def test_request_guess_raises_upstream_error_on_non_2xx(settings):
    stub = UpstreamStub(lambda request: httpx.Response(500, text="boom"))

    async with httpx.AsyncClient(transport=httpx.MockTransport(stub)) as client:
        with pytest.raises(UpstreamError) as exc_info:
            await openai_client.request_guess(client, settings, "p", "QUJD")

    assert exc_info.value.upstream_status == 500
    assert exc_info.value.message == "AI error: 500 boom"
    assert len(stub.requests) == 1


@pytest.mark.anyio
async def test_request_guess_rejects_non_json_envelope(settings):
    stub = UpstreamStub(lambda request: httpx.Response(200, text="<html>gateway</html>"))

    async with httpx.AsyncClient(transport=httpx.MockTransport(stub)) as client:
        with pytest.raises(FormatError):
            await openai_client.request_guess(client, settings, "p", "QUJD")
