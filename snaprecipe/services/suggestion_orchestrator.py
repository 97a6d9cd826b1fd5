"""
Recipe suggestion pipeline: suggest, then illustrate every recipe concurrently.

Flow:
  AwaitingRecipes -> Failed            (suggestion step raised; propagated as-is)
                  -> Done              (no recipes; no illustration calls)
                  -> AwaitingImages    (one task per recipe, all joined)
                  -> Done

Illustration is best effort. Each task settles into an explicit outcome, and
a failed illustration only means that recipe is returned without imageDataUri.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Union

from snaprecipe.models.recipe import RecipeSuggestion, SuggestionResult
from snaprecipe.services.recipe_illustrator import RecipeIllustrator
from snaprecipe.services.recipe_suggester import RecipeSuggester
from snaprecipe.utils.data_uri import describe_data_uri

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Illustrated:
    image_data_uri: str


@dataclass(frozen=True)
class IllustrationFailed:
    error: Exception


IllustrationOutcome = Union[Illustrated, IllustrationFailed]


class SuggestionOrchestrator:
    """Composes recipe suggestion with per-recipe illustration."""

    def __init__(
        self,
        suggester: Optional[RecipeSuggester] = None,
        illustrator: Optional[RecipeIllustrator] = None,
    ) -> None:
        self.suggester = suggester or RecipeSuggester()
        self.illustrator = illustrator or RecipeIllustrator()

    async def suggest(self, photo_data_uri: str) -> SuggestionResult:
        """Suggest recipes for the photo and attach an illustration to each one that succeeds."""
        logger.info("Suggestion pipeline started (photo=%s)", describe_data_uri(photo_data_uri))

        result = await self.suggester.suggest(photo_data_uri)
        if not result.recipes:
            logger.info("No recipes suggested; skipping illustration")
            return result

        outcomes = await asyncio.gather(*(self._illustrate(recipe) for recipe in result.recipes))

        recipes = [self._merge(recipe, outcome) for recipe, outcome in zip(result.recipes, outcomes)]
        illustrated = sum(1 for outcome in outcomes if isinstance(outcome, Illustrated))
        logger.info(
            "Suggestion pipeline finished: %d recipes, %d illustrated",
            len(recipes),
            illustrated,
        )
        return SuggestionResult(recipes=recipes)

    async def _illustrate(self, recipe: RecipeSuggestion) -> IllustrationOutcome:
        try:
            image = await self.illustrator.illustrate(recipe.title)
        except Exception as e:
            logger.error(
                'Failed to generate image for recipe "%s": %s',
                recipe.title,
                str(e),
                extra={"recipe_title": recipe.title, "error_type": type(e).__name__},
                exc_info=True,
            )
            return IllustrationFailed(error=e)
        return Illustrated(image_data_uri=image.imageDataUri)

    @staticmethod
    def _merge(recipe: RecipeSuggestion, outcome: IllustrationOutcome) -> RecipeSuggestion:
        if isinstance(outcome, Illustrated):
            return recipe.model_copy(update={"imageDataUri": outcome.image_data_uri})
        return recipe
