"""Pydantic models."""

from snaprecipe.models.recipe import (
    GeneratedImage,
    GenerateRecipeImageInput,
    ImproveRecipeIdeasInput,
    ImproveRecipeIdeasOutput,
    RecipeBatch,
    RecipeDraft,
    RecipeSuggestion,
    SuggestionResult,
    SuggestRecipesInput,
)

__all__ = [
    "GeneratedImage",
    "GenerateRecipeImageInput",
    "ImproveRecipeIdeasInput",
    "ImproveRecipeIdeasOutput",
    "RecipeBatch",
    "RecipeDraft",
    "RecipeSuggestion",
    "SuggestionResult",
    "SuggestRecipesInput",
]
