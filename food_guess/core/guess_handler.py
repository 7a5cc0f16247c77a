"""
Guess request handler with linear pipeline execution.
"""

import json
import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from food_guess.clients import openai_client
from food_guess.core.config import Settings
from food_guess.core.errors import (
    FoodGuessError,
    FormatError,
    PayloadTooLargeError,
    RequestValidationFailed,
    describe_validation_error,
    flatten_validation_error,
)
from food_guess.core.prompt import build_prompt
from food_guess_schemas.food import GuessRequest, GuessResponse

logger = logging.getLogger(__name__)


class GuessRequestHandler:
    """
    Handles the complete pipeline for a single guess request.

    Pipeline:
    1. Validate request body (shape, minimum image length)
    2. Reject oversized images (413)
    3. Build prompt
    4. Call upstream once (credential checked first)
    5. Extract and parse the model's JSON text
    6. Validate output against GuessResponse

    Any step may fail; nothing partial is ever returned.
    """

    def __init__(self, settings: Settings, client: httpx.AsyncClient):
        """
        Initialize guess request handler.

        Args:
            settings: Injected configuration (credential, model, limits)
            client: Shared HTTP client for the upstream call
        """
        self.settings = settings
        self.client = client

        # Pipeline state
        self.request: Optional[GuessRequest] = None
        self.prompt: Optional[str] = None
        self.envelope: Optional[Dict[str, Any]] = None

    async def execute(self, body: Any) -> GuessResponse:
        """
        Run the pipeline for one decoded JSON body.

        Returns:
            Validated GuessResponse

        Raises:
            FoodGuessError: Any pipeline failure, mapped to its HTTP status
        """
        try:
            self.request = self.validate_request(body)
            self.check_size(self.request)
            self.prompt = build_prompt(self.request)
            self.envelope = await openai_client.request_guess(
                self.client,
                self.settings,
                self.prompt,
                self.request.image_base64
            )
            result = self.validate_response(self.envelope)
        except FoodGuessError:
            raise
        except Exception as e:
            logger.error(f"Unexpected error in guess pipeline: {e!r}")
            raise RequestValidationFailed(str(e) or "Bad request") from e

        logger.info(f"Guess succeeded with {len(result.items)} item(s)")
        return result

    def validate_request(self, body: Any) -> GuessRequest:
        """Parse the inbound body into a GuessRequest."""
        if not isinstance(body, dict):
            raise RequestValidationFailed("Request body must be a JSON object")

        try:
            request = GuessRequest.model_validate(body)
        except ValidationError as e:
            raise RequestValidationFailed(describe_validation_error(e)) from e
        return request

    def check_size(self, request: GuessRequest) -> None:
        """Reject images too large to send upstream."""
        if len(request.image_base64) > self.settings.MAX_IMAGE_BASE64_LENGTH:
            logger.warning(f"Rejecting image of {len(request.image_base64)} base64 chars")
            raise PayloadTooLargeError()

    @staticmethod
    def validate_response(envelope: Dict[str, Any]) -> GuessResponse:
        """
        Parse and validate the model's JSON text.

        Raises:
            FormatError: Text is not JSON, or does not match GuessResponse
        """
        text = openai_client.extract_output_text(envelope)

        try:
            data = json.loads(text)
        except (json.JSONDecodeError, RecursionError) as e:
            raise FormatError(f"AI returned invalid JSON: {e}") from e

        try:
            return GuessResponse.model_validate(data)
        except ValidationError as e:
            raise FormatError(
                "AI returned unexpected format",
                details=flatten_validation_error(e)
            ) from e
