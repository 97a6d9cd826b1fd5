"""Recipe suggestions from a photo of ingredients."""

from __future__ import annotations

import logging
from typing import Optional

from snaprecipe.config import settings
from snaprecipe.models.decoding import decode_recipe_batch
from snaprecipe.models.recipe import RecipeSuggestion, SuggestionResult
from snaprecipe.services.gemini_service import GeminiGateway
from snaprecipe.utils.data_uri import parse_image_data_uri
from snaprecipe.utils.exceptions import ModelInvocationError
from snaprecipe.utils.gemini_helpers import get_recipe_batch_schema

logger = logging.getLogger(__name__)


class RecipeSuggester:
    """Asks the vision model for recipes that fit the pictured ingredients."""

    def __init__(self, gateway: Optional[GeminiGateway] = None, min_recipes: Optional[int] = None) -> None:
        self.gateway = gateway or GeminiGateway()
        self.min_recipes = settings.min_recipes if min_recipes is None else min_recipes

    async def suggest(self, photo_data_uri: str) -> SuggestionResult:
        """
        Suggest recipes for the ingredients in the photo.

        Returns an empty result when the model has nothing to suggest. Recipes are
        returned without illustrations.

        Raises:
            ValidationError: If the photo is not a well-formed image data URI
            ModelInvocationError: If the Gemini call fails
            SchemaValidationError: If the response does not match the recipe schema
        """
        photo = parse_image_data_uri(photo_data_uri)
        prompt = self._build_prompt()

        logger.info(
            "Suggesting recipes from photo (mime_type=%s, bytes=%d)",
            photo.mime_type,
            len(photo.data),
        )

        try:
            payload = await self.gateway.generate_structured(
                prompt=prompt,
                schema=get_recipe_batch_schema(),
                image=photo,
            )
        except ModelInvocationError:
            raise
        except Exception as e:
            logger.error("Recipe suggestion failed: %s", str(e), exc_info=True)
            raise ModelInvocationError(f"Failed to suggest recipes: {str(e)}") from e

        decoded = decode_recipe_batch(payload)
        if not decoded.ok:
            logger.error("Recipe suggestion response rejected: %s", decoded.error)
            raise decoded.error

        recipes = [RecipeSuggestion(**draft.model_dump()) for draft in decoded.unwrap()]
        logger.info("Model suggested %d recipes", len(recipes))
        return SuggestionResult(recipes=recipes)

    def _build_prompt(self) -> str:
        return f"""
You are a recipe suggestion AI. A user has uploaded a photo of ingredients, and you will suggest recipes that can be made with those ingredients.

Suggest at least {self.min_recipes} recipes.

For each recipe, provide:
1. A clear, concise, and creative title that reflects the dish's unique qualities.
2. A detailed description that highlights the flavors, textures, and origins of the dish, enticing the user to try it.
3. A comprehensive list of ingredients with precise quantities and specific preparation instructions (e.g., "1 cup diced Roma tomatoes", "2 tbsp finely chopped fresh basil"). Be very specific about the ingredients based ONLY on the image, assume the user has pantry staples like oil, salt, pepper.
4. Detailed, step-by-step instructions. Make the instructions very clear and easy to follow, breaking down complex steps into smaller, manageable actions. Include cooking times, temperatures, and visual cues to ensure accuracy.

Respond ONLY with a JSON object of the form {{"recipes": [{{"title": "", "description": "", "ingredients": [""], "instructions": ""}}]}}.
No Markdown, no ``` fences, no text before or after the JSON.

The ingredients photo is attached.
""".strip()
