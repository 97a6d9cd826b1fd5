"""
Parse-or-reject decoding of Gemini payloads.

Nothing returned by the model is trusted until it passes through one of the
decode functions below. Each returns a DecodeResult carrying either the
validated value or the SchemaValidationError explaining the rejection.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import ValidationError as PydanticValidationError

from snaprecipe.models.recipe import (
    GeneratedImage,
    ImproveRecipeIdeasOutput,
    RecipeBatch,
    RecipeDraft,
)
from snaprecipe.utils.exceptions import SchemaValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class DecodeResult(Generic[T]):
    """Validated value or validation error, never both."""

    value: Optional[T] = None
    error: Optional[SchemaValidationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    @classmethod
    def success(cls, value: T) -> "DecodeResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, message: str) -> "DecodeResult[T]":
        return cls(error=SchemaValidationError(message))


def _summarize_errors(exc: PydanticValidationError) -> str:
    parts = []
    for err in exc.errors()[:5]:
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc or '<root>'}: {err.get('msg')}")
    if exc.error_count() > 5:
        parts.append(f"... {exc.error_count() - 5} more")
    return "; ".join(parts)


def decode_recipe_batch(payload: Any) -> DecodeResult[List[RecipeDraft]]:
    """
    Decode the suggestion model's output.

    A missing payload, or an object without a ``recipes`` value, means the model
    had nothing to suggest and decodes to an empty list.
    """
    if payload is None:
        return DecodeResult.success([])
    if not isinstance(payload, dict):
        return DecodeResult.failure(
            f"Recipe response must be a JSON object, got {type(payload).__name__}"
        )
    if payload.get("recipes") is None:
        return DecodeResult.success([])

    try:
        batch = RecipeBatch.model_validate(payload)
    except PydanticValidationError as e:
        return DecodeResult.failure(f"Recipe response does not match schema: {_summarize_errors(e)}")
    return DecodeResult.success(batch.recipes)


def decode_generated_image(payload: Any) -> DecodeResult[GeneratedImage]:
    """Decode an illustration payload; ``imageDataUri`` must be an image data URI."""
    if not isinstance(payload, dict):
        return DecodeResult.failure(
            f"Image response must be an object, got {type(payload).__name__}"
        )
    try:
        return DecodeResult.success(GeneratedImage.model_validate(payload))
    except PydanticValidationError as e:
        return DecodeResult.failure(f"Image response does not match schema: {_summarize_errors(e)}")


def decode_improved_ideas(payload: Any) -> DecodeResult[ImproveRecipeIdeasOutput]:
    if payload is None:
        return DecodeResult.success(ImproveRecipeIdeasOutput())
    if not isinstance(payload, dict):
        return DecodeResult.failure(
            f"Ideas response must be a JSON object, got {type(payload).__name__}"
        )
    if payload.get("improvedRecipeIdeas") is None:
        return DecodeResult.success(ImproveRecipeIdeasOutput())

    try:
        output = ImproveRecipeIdeasOutput.model_validate(payload)
    except PydanticValidationError as e:
        return DecodeResult.failure(f"Ideas response does not match schema: {_summarize_errors(e)}")
    ideas = [idea.strip() for idea in output.improvedRecipeIdeas if idea.strip()]
    return DecodeResult.success(ImproveRecipeIdeasOutput(improvedRecipeIdeas=ideas))
