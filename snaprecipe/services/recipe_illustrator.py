"""Illustrative photo generation for a recipe title."""

from __future__ import annotations

import logging
from typing import Optional

from snaprecipe.models.decoding import decode_generated_image
from snaprecipe.models.recipe import GeneratedImage
from snaprecipe.services.gemini_service import GeminiGateway
from snaprecipe.utils.exceptions import ModelInvocationError, ValidationError

logger = logging.getLogger(__name__)


class RecipeIllustrator:
    """Generates one picture of the finished dish. Pass/fail, no partial results."""

    def __init__(self, gateway: Optional[GeminiGateway] = None) -> None:
        self.gateway = gateway or GeminiGateway()

    async def illustrate(self, recipe_title: str) -> GeneratedImage:
        """
        Generate an image for a recipe title. Image generation can take several seconds.

        Raises:
            ValidationError: If the title is blank
            ModelInvocationError: If the call fails or returns no media
            SchemaValidationError: If the media is not an image data URI
        """
        title = (recipe_title or "").strip()
        if not title:
            raise ValidationError("Recipe title must be a non-empty string")

        logger.info("Generating image for recipe title=%s", title)

        try:
            media = await self.gateway.generate_image(prompt=self._build_prompt(title))
        except ModelInvocationError:
            raise
        except Exception as e:
            raise ModelInvocationError(f"Failed to generate image for {title!r}: {str(e)}") from e

        if media is None or not media.url:
            raise ModelInvocationError("Image generation failed or returned no media URL.")

        return decode_generated_image({"imageDataUri": media.url}).unwrap()

    def _build_prompt(self, title: str) -> str:
        return (
            f'Generate a visually appealing and appetizing photo of the finished dish: "{title}". '
            "The image should closely represent the actual ingredients and cooking style of the recipe. "
            "Ensure the dish looks delicious, authentic, and inviting, with attention to detail in the presentation."
        )
