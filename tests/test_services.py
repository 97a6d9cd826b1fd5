"""Tests for service modules."""

import asyncio

import pytest

from conftest import (
    DISH_DATA_URI,
    JPEG_BYTES,
    PHOTO_DATA_URI,
    PNG_BYTES,
    FakeGateway,
    recipe_payload,
)
from snaprecipe.config import settings
from snaprecipe.services.idea_improver import RecipeIdeaImprover
from snaprecipe.services.image_service import ImageService
from snaprecipe.services.recipe_illustrator import RecipeIllustrator
from snaprecipe.services.recipe_suggester import RecipeSuggester
from snaprecipe.utils.exceptions import (
    ImageProcessingError,
    ModelInvocationError,
    SchemaValidationError,
    ValidationError,
)


def run(coro):
    return asyncio.run(coro)


class TestRecipeSuggester:
    def test_suggest_returns_recipes_without_images(self):
        gateway = FakeGateway(structured=recipe_payload("Tomato Basil Pasta", "Caprese Salad"))

        result = run(RecipeSuggester(gateway).suggest(PHOTO_DATA_URI))

        assert [r.title for r in result.recipes] == ["Tomato Basil Pasta", "Caprese Salad"]
        assert all(r.imageDataUri is None for r in result.recipes)

    def test_photo_is_attached_and_schema_requested(self):
        gateway = FakeGateway(structured=recipe_payload("Soup"))

        run(RecipeSuggester(gateway).suggest(PHOTO_DATA_URI))

        call = gateway.structured_calls[0]
        assert call["image"].mime_type == "image/jpeg"
        assert call["image"].data == JPEG_BYTES
        assert "recipes" in call["schema"]["properties"]

    def test_prompt_content(self):
        gateway = FakeGateway(structured=None)

        run(RecipeSuggester(gateway, min_recipes=6).suggest(PHOTO_DATA_URI))

        prompt = gateway.structured_calls[0]["prompt"]
        assert "at least 6 recipes" in prompt
        assert "pantry staples like oil, salt, pepper" in prompt
        assert "temperatures" in prompt

    def test_min_recipes_defaults_to_settings(self):
        assert RecipeSuggester(FakeGateway()).min_recipes == settings.min_recipes

    def test_explicit_min_recipes_is_kept(self):
        gateway = FakeGateway(structured=None)

        suggester = RecipeSuggester(gateway, min_recipes=0)
        run(suggester.suggest(PHOTO_DATA_URI))

        assert suggester.min_recipes == 0
        assert "at least 0 recipes" in gateway.structured_calls[0]["prompt"]

    def test_no_output_is_empty_result(self):
        result = run(RecipeSuggester(FakeGateway(structured=None)).suggest(PHOTO_DATA_URI))
        assert result.recipes == []

    def test_malformed_photo_rejected_before_model_call(self):
        gateway = FakeGateway()
        with pytest.raises(ValidationError):
            run(RecipeSuggester(gateway).suggest("data:image/jpeg;base64"))
        assert gateway.structured_calls == []

    def test_gateway_failure_propagates(self):
        gateway = FakeGateway(structured_error=ModelInvocationError("quota exceeded"))
        with pytest.raises(ModelInvocationError, match="quota exceeded"):
            run(RecipeSuggester(gateway).suggest(PHOTO_DATA_URI))

    def test_unexpected_gateway_error_wrapped(self):
        gateway = FakeGateway(structured_error=ConnectionError("reset by peer"))
        with pytest.raises(ModelInvocationError) as exc_info:
            run(RecipeSuggester(gateway).suggest(PHOTO_DATA_URI))
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    def test_schema_mismatch_rejected(self):
        gateway = FakeGateway(structured={"recipes": [{"title": "Soup"}]})
        with pytest.raises(SchemaValidationError):
            run(RecipeSuggester(gateway).suggest(PHOTO_DATA_URI))


class TestRecipeIllustrator:
    def test_illustrate(self):
        gateway = FakeGateway()

        image = run(RecipeIllustrator(gateway).illustrate("Tomato Basil Pasta"))

        assert image.imageDataUri == DISH_DATA_URI
        call = gateway.image_calls[0]
        assert 'finished dish: "Tomato Basil Pasta"' in call["prompt"]
        assert call["modalities"] == ("TEXT", "IMAGE")

    def test_no_media_fails(self):
        gateway = FakeGateway(images={"Caprese Salad": None})
        with pytest.raises(ModelInvocationError, match="no media"):
            run(RecipeIllustrator(gateway).illustrate("Caprese Salad"))

    def test_non_image_media_rejected(self):
        gateway = FakeGateway(images={"Soup": "data:text/plain;base64,aGVsbG8="})
        with pytest.raises(SchemaValidationError):
            run(RecipeIllustrator(gateway).illustrate("Soup"))

    def test_blank_title_rejected(self):
        gateway = FakeGateway()
        with pytest.raises(ValidationError):
            run(RecipeIllustrator(gateway).illustrate("   "))
        assert gateway.image_calls == []


class TestRecipeIdeaImprover:
    def test_improve(self):
        gateway = FakeGateway(structured={"improvedRecipeIdeas": ["Finish the pasta with burrata"]})

        output = run(RecipeIdeaImprover(gateway).improve(["Tomato Basil Pasta", "Caprese Salad"]))

        assert output.improvedRecipeIdeas == ["Finish the pasta with burrata"]
        prompt = gateway.structured_calls[0]["prompt"]
        assert "- Tomato Basil Pasta\n- Caprese Salad" in prompt
        assert gateway.structured_calls[0]["image"] is None

    def test_empty_suggestions_rejected(self):
        with pytest.raises(ValidationError):
            run(RecipeIdeaImprover(FakeGateway()).improve(["", "  "]))

    def test_no_output_is_empty(self):
        output = run(RecipeIdeaImprover(FakeGateway(structured=None)).improve(["Soup"]))
        assert output.improvedRecipeIdeas == []


class TestImageService:
    def test_png_to_data_uri(self):
        assert ImageService.to_data_uri(PNG_BYTES, "dish.png") == DISH_DATA_URI

    def test_jpeg_detected(self):
        _, mime_type = ImageService.validate_image(JPEG_BYTES, "fridge.jpg")
        assert mime_type == "image/jpeg"

    def test_empty_rejected(self):
        with pytest.raises(ImageProcessingError, match="empty"):
            ImageService.validate_image(b"", "empty.jpg")

    def test_too_large_rejected(self):
        with pytest.raises(ImageProcessingError, match="too large"):
            ImageService.validate_image(JPEG_BYTES, "big.jpg", max_size=8)

    def test_unsupported_format_rejected(self):
        with pytest.raises(ImageProcessingError, match="Unsupported"):
            ImageService.validate_image(b"%PDF-1.7 not an image", "recipe.pdf")
