"""Recipe Pydantic models."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from snaprecipe.utils.data_uri import parse_image_data_uri
from snaprecipe.utils.exceptions import ValidationError


def _require_image_data_uri(value: str) -> str:
    try:
        parse_image_data_uri(value)
    except ValidationError as e:
        raise ValueError(str(e)) from e
    return value


class RecipeDraft(BaseModel):
    """Recipe as returned by the suggestion model, before illustration."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, description="The title of the recipe.")
    description: str = Field(..., description="A brief description of the recipe.")
    ingredients: List[str] = Field(..., description="A list of ingredients for the recipe.")
    instructions: str = Field(
        ..., description="Detailed, step-by-step preparation instructions for the recipe."
    )

    @field_validator("ingredients")
    @classmethod
    def drop_blank_ingredients(cls, value: List[str]) -> List[str]:
        return [line.strip() for line in value if line.strip()]


class RecipeBatch(BaseModel):
    """Shape the suggestion model is asked to respond with."""

    recipes: List[RecipeDraft] = Field(..., description="A list of suggested recipes.")


class RecipeSuggestion(RecipeDraft):
    """Recipe suggestion returned to callers."""

    imageDataUri: Optional[str] = Field(
        None,
        description="A data URI of an image generated for the recipe. Format: 'data:image/png;base64,<encoded_data>'.",
    )

    @field_validator("imageDataUri")
    @classmethod
    def check_image_data_uri(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return _require_image_data_uri(value)


class SuggestionResult(BaseModel):
    """Ordered recipe suggestions. An empty list means nothing was found."""

    recipes: List[RecipeSuggestion] = Field(default_factory=list, description="A list of suggested recipes.")


class GeneratedImage(BaseModel):
    """Output of the recipe illustration step."""

    imageDataUri: str = Field(
        ..., description="The generated image as a data URI. Format: 'data:image/png;base64,<encoded_data>'."
    )

    @field_validator("imageDataUri")
    @classmethod
    def check_image_data_uri(cls, value: str) -> str:
        return _require_image_data_uri(value)


class SuggestRecipesInput(BaseModel):
    """Request body for recipe suggestion."""

    photoDataUri: str = Field(
        ...,
        description=(
            "A photo of ingredients, as a data URI that must include a MIME type and use Base64 encoding. "
            "Expected format: 'data:<mimetype>;base64,<encoded_data>'."
        ),
    )

    @field_validator("photoDataUri")
    @classmethod
    def check_photo(cls, value: str) -> str:
        return _require_image_data_uri(value)


class GenerateRecipeImageInput(BaseModel):
    """Request body for recipe illustration."""

    model_config = ConfigDict(str_strip_whitespace=True)

    recipeTitle: str = Field(..., min_length=1, description="The title of the recipe to generate an image for.")


class ImproveRecipeIdeasInput(BaseModel):
    """Request body for recipe idea improvement."""

    recipeSuggestions: List[str] = Field(..., min_length=1, description="A list of initial recipe suggestions.")


class ImproveRecipeIdeasOutput(BaseModel):
    """Creative improvement ideas for a list of recipes."""

    improvedRecipeIdeas: List[str] = Field(
        default_factory=list, description="A list of creative ideas for improvements to the recipe."
    )
