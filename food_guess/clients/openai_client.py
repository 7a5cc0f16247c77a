"""
OpenAI Responses API client.
Sends one photo plus instructions to the vision model and reads back its text output.
"""

import logging
import re
from typing import Any, Callable, Dict, List, Optional

import httpx

from food_guess.core.config import Settings
from food_guess.core.errors import ConfigurationError, FormatError, UpstreamError

logger = logging.getLogger(__name__)

DATA_URL_PREFIX = re.compile(r"^data:image/\w+;base64,")


def strip_data_url_prefix(image_base64: str) -> str:
    """Remove a leading 'data:image/<type>;base64,' if the caller sent one."""
    return DATA_URL_PREFIX.sub("", image_base64, count=1)


def build_payload(prompt: str, image_base64: str, model: str) -> Dict[str, Any]:
    """
    Build the Responses API request body.

    Args:
        prompt: Instruction text
        image_base64: Image payload, with or without a data URL prefix
        model: Upstream model name

    Returns:
        JSON-serialisable request body asking for a JSON object response
    """
    image = strip_data_url_prefix(image_base64)
    return {
        "model": model,
        "input": [
            {
                "role": "user",
                "content": [
                    {"type": "input_text", "text": prompt},
                    {"type": "input_image", "image_url": f"data:image/jpeg;base64,{image}"},
                ],
            }
        ],
        "text": {"format": {"type": "json_object"}},
    }


async def request_guess(
    client: httpx.AsyncClient,
    settings: Settings,
    prompt: str,
    image_base64: str
) -> Dict[str, Any]:
    """
    Send a single request to the inference API. No retries.

    Args:
        client: HTTP client
        settings: Settings holding the credential, endpoint and model
        prompt: Instruction text
        image_base64: Image payload from the caller

    Returns:
        Decoded response envelope

    Raises:
        ConfigurationError: If no API key is configured (no call is made)
        UpstreamError: If the call fails or returns a non-2xx status
        FormatError: If the envelope is not a JSON object
    """
    api_key = settings.OPENAI_API_KEY
    if not api_key:
        raise ConfigurationError("Missing OPENAI_API_KEY")

    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json"
    }
    payload = build_payload(prompt, image_base64, settings.OPENAI_MODEL)

    logger.info(f"Calling {settings.OPENAI_MODEL} with image of {len(image_base64)} base64 chars")

    try:
        response = await client.post(settings.OPENAI_API_URL, headers=headers, json=payload)
    except httpx.RequestError as e:
        logger.error(f"Request error calling inference API: {e!r}")
        raise UpstreamError(None, str(e) or type(e).__name__) from e

    if not response.is_success:
        body = _read_body(response)
        logger.error(f"Inference API returned HTTP {response.status_code}")
        raise UpstreamError(response.status_code, body)

    try:
        envelope = response.json()
    except ValueError as e:
        raise FormatError(f"AI returned unreadable response: {e}") from e

    if not isinstance(envelope, dict):
        raise FormatError("AI returned unreadable response: expected a JSON object")

    return envelope


def _read_body(response: httpx.Response) -> str:
    """Best-effort body text; never masks the status error."""
    try:
        return response.text
    except Exception as e:
        logger.warning(f"Failed to read error body: {e}")
        return ""


# ============================================================================
# Output text lookup
# ============================================================================

def _direct_output_text(envelope: Dict[str, Any]) -> Optional[str]:
    text = envelope.get("output_text")
    return text if isinstance(text, str) else None


def _first_message_text(envelope: Dict[str, Any]) -> Optional[str]:
    output = envelope.get("output")
    if not isinstance(output, list):
        return None

    message = next(
        (entry for entry in output if isinstance(entry, dict) and entry.get("type") == "message"),
        None
    )
    if message is None:
        return None

    content = message.get("content")
    if not isinstance(content, list) or not content or not isinstance(content[0], dict):
        return None

    text = content[0].get("text")
    return text if isinstance(text, str) else None


OUTPUT_TEXT_LOOKUPS: List[Callable[[Dict[str, Any]], Optional[str]]] = [
    _direct_output_text,
    _first_message_text,
]


def extract_output_text(envelope: Dict[str, Any]) -> str:
    """
    Locate the model's text output in a response envelope.

    Order: top-level 'output_text', then the first content text of the
    first 'message' entry in 'output', else an empty string.
    """
    for lookup in OUTPUT_TEXT_LOOKUPS:
        text = lookup(envelope)
        if text is not None:
            return text
    return ""
