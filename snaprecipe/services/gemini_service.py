"""
Gemini gateway: the only place that talks to google-genai.

Two capabilities:
- structured generation: prompt (+ optional inline image) constrained to a JSON schema
- image generation: prompt answered with TEXT and IMAGE modalities

Every SDK/transport failure surfaces as ModelInvocationError; an unparseable
JSON body surfaces as SchemaValidationError. No retries are attempted.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from google import genai
from google.genai import types

from snaprecipe.config import settings
from snaprecipe.services.gemini_utils import (
    find_inline_image,
    get_response_text,
    log_empty_response,
    safe_json_loads,
)
from snaprecipe.utils.data_uri import DataUri, build_data_uri
from snaprecipe.utils.exceptions import ModelInvocationError, SchemaValidationError

logger = logging.getLogger(__name__)

# Some image models refuse requests that don't ask for both modalities
DEFAULT_IMAGE_MODALITIES = ("TEXT", "IMAGE")


@dataclass(frozen=True)
class GeneratedMedia:
    """Media returned by the image model; ``url`` is a data URI."""

    url: str
    content_type: str


class GeminiGateway:
    """Async facade over the google-genai client."""

    def __init__(self, client: Optional[genai.Client] = None) -> None:
        self._client = client

    @property
    def client(self) -> genai.Client:
        """Get or create Gemini client (lazy initialization)."""
        if self._client is None:
            self._client = genai.Client(api_key=settings.gemini_api_key)
        return self._client

    async def generate_structured(
        self,
        *,
        prompt: str,
        schema: Dict[str, Any],
        image: Optional[DataUri] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
    ) -> Any:
        """
        Request JSON constrained to ``schema``.

        Returns the parsed JSON value, or None when the model produced no output.
        """
        model = model or settings.gemini_text_model
        contents: Any = prompt
        if image is not None:
            contents = [prompt, types.Part.from_bytes(data=image.data, mime_type=image.mime_type)]

        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=schema,
            temperature=settings.gemini_temperature if temperature is None else temperature,
        )

        response = await self._generate(model=model, contents=contents, config=config)

        text = get_response_text(response)
        if not text.strip():
            log_empty_response(f"[{model}] structured generation", response)
            return None
        logger.debug("Gemini raw response:\n%s", text)

        try:
            return safe_json_loads(text)
        except json.JSONDecodeError as e:
            raise SchemaValidationError(f"Gemini returned invalid JSON: {str(e)}") from e

    async def generate_image(
        self,
        *,
        prompt: str,
        modalities: Sequence[str] = DEFAULT_IMAGE_MODALITIES,
        model: Optional[str] = None,
    ) -> Optional[GeneratedMedia]:
        """Request an image; returns None when the response carries no image part."""
        model = model or settings.gemini_image_model
        config = types.GenerateContentConfig(response_modalities=list(modalities))

        response = await self._generate(model=model, contents=prompt, config=config)

        found = find_inline_image(response)
        if found is None:
            log_empty_response(f"[{model}] image generation", response)
            return None

        mime_type, data = found
        return GeneratedMedia(url=build_data_uri(mime_type, data), content_type=mime_type)

    async def _generate(self, *, model: str, contents: Any, config: types.GenerateContentConfig) -> Any:
        """Single blocking SDK call, moved off the event loop."""

        def _sync_call() -> Any:
            return self.client.models.generate_content(
                model=model,
                contents=contents,
                config=config,
            )

        try:
            return await asyncio.to_thread(_sync_call)
        except Exception as e:
            logger.error("Gemini call to %s failed: %s", model, str(e))
            raise ModelInvocationError(f"Gemini call to {model} failed: {str(e)}") from e
