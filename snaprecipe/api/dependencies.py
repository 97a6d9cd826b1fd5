"""Shared API dependencies."""

from snaprecipe.services.gemini_service import GeminiGateway
from snaprecipe.services.idea_improver import RecipeIdeaImprover
from snaprecipe.services.recipe_illustrator import RecipeIllustrator
from snaprecipe.services.recipe_suggester import RecipeSuggester
from snaprecipe.services.suggestion_orchestrator import SuggestionOrchestrator


def get_gateway() -> GeminiGateway:
    """Get Gemini gateway instance."""
    return GeminiGateway()


def get_orchestrator() -> SuggestionOrchestrator:
    """Get suggestion pipeline instance."""
    gateway = get_gateway()
    return SuggestionOrchestrator(
        suggester=RecipeSuggester(gateway),
        illustrator=RecipeIllustrator(gateway),
    )


def get_illustrator() -> RecipeIllustrator:
    """Get recipe illustrator instance."""
    return RecipeIllustrator(get_gateway())


def get_idea_improver() -> RecipeIdeaImprover:
    """Get recipe idea improver instance."""
    return RecipeIdeaImprover(get_gateway())
