"""Creative improvement ideas for a list of recipe suggestions."""

from __future__ import annotations

import logging
from typing import List, Optional

from snaprecipe.models.decoding import decode_improved_ideas
from snaprecipe.models.recipe import ImproveRecipeIdeasOutput
from snaprecipe.services.gemini_service import GeminiGateway
from snaprecipe.utils.exceptions import ModelInvocationError, ValidationError
from snaprecipe.utils.gemini_helpers import get_improved_ideas_schema

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 50


class RecipeIdeaImprover:
    def __init__(self, gateway: Optional[GeminiGateway] = None) -> None:
        self.gateway = gateway or GeminiGateway()

    async def improve(self, recipe_suggestions: List[str]) -> ImproveRecipeIdeasOutput:
        suggestions = [s.strip() for s in recipe_suggestions if isinstance(s, str) and s.strip()]
        if not suggestions:
            raise ValidationError("At least one recipe suggestion is required")
        if len(suggestions) > MAX_SUGGESTIONS:
            raise ValidationError(f"Recipe suggestions cannot exceed {MAX_SUGGESTIONS} items")

        logger.info("Improving %d recipe ideas", len(suggestions))

        try:
            payload = await self.gateway.generate_structured(
                prompt=self._build_prompt(suggestions),
                schema=get_improved_ideas_schema(),
            )
        except ModelInvocationError:
            raise
        except Exception as e:
            logger.error("Recipe idea improvement failed: %s", str(e), exc_info=True)
            raise ModelInvocationError(f"Failed to improve recipe ideas: {str(e)}") from e

        return decode_improved_ideas(payload).unwrap()

    def _build_prompt(self, suggestions: List[str]) -> str:
        bullets = "\n".join(f"- {s}" for s in suggestions)
        return f"""
You are a creative recipe improvement assistant. Given a list of recipe suggestions, generate creative ideas for improving each recipe.

Recipe Suggestions:
{bullets}

Generate a list of ideas for improvements to the recipes.
Respond ONLY with a JSON object of the form {{"improvedRecipeIdeas": [""]}}.
""".strip()
