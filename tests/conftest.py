"""Pytest configuration and fixtures."""

import asyncio
import base64
import os
import re
from typing import Any, Dict, List, Optional, Union

# Settings are read at import time
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")

import pytest
from fastapi.testclient import TestClient

from snaprecipe.main import app
from snaprecipe.models.recipe import GeneratedImage, RecipeSuggestion, SuggestionResult
from snaprecipe.services.gemini_service import GeneratedMedia
from snaprecipe.utils.exceptions import ModelInvocationError

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\rIHDR" + b"\x00" * 16
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 32


def data_uri(mime_type: str, data: bytes) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


PHOTO_DATA_URI = data_uri("image/jpeg", JPEG_BYTES)
DISH_DATA_URI = data_uri("image/png", PNG_BYTES)


def recipe_payload(*titles: str) -> Dict[str, Any]:
    return {
        "recipes": [
            {
                "title": title,
                "description": f"A lovely {title.lower()}.",
                "ingredients": ["2 ripe tomatoes, diced", "1 tbsp olive oil"],
                "instructions": "1. Prep.\n2. Cook for 10 minutes.",
            }
            for title in titles
        ]
    }


class FakeGateway:
    """In-memory stand-in for GeminiGateway."""

    def __init__(
        self,
        structured: Any = None,
        structured_error: Optional[Exception] = None,
        images: Optional[Dict[str, Union[str, Exception, None]]] = None,
    ) -> None:
        self.structured = structured
        self.structured_error = structured_error
        self.images = images or {}
        self.structured_calls: List[Dict[str, Any]] = []
        self.image_calls: List[Dict[str, Any]] = []

    async def generate_structured(self, *, prompt, schema, image=None, model=None, temperature=None):
        self.structured_calls.append({"prompt": prompt, "schema": schema, "image": image})
        if self.structured_error is not None:
            raise self.structured_error
        return self.structured

    async def generate_image(self, *, prompt, modalities=("TEXT", "IMAGE"), model=None):
        self.image_calls.append({"prompt": prompt, "modalities": tuple(modalities)})
        title = re.search(r'dish: "(.+?)"', prompt).group(1)
        outcome = self.images.get(title, DISH_DATA_URI)
        if isinstance(outcome, Exception):
            raise outcome
        if outcome is None:
            return None
        return GeneratedMedia(url=outcome, content_type=outcome[5:outcome.index(";")])


class FakeSuggester:
    def __init__(self, titles=(), error: Optional[Exception] = None) -> None:
        self.titles = list(titles)
        self.error = error
        self.calls: List[str] = []

    async def suggest(self, photo_data_uri: str) -> SuggestionResult:
        self.calls.append(photo_data_uri)
        if self.error is not None:
            raise self.error
        return SuggestionResult(
            recipes=[RecipeSuggestion(**r) for r in recipe_payload(*self.titles)["recipes"]]
        )


class FakeIllustrator:
    """Succeeds for every title except those listed in ``failing``."""

    def __init__(self, failing=(), delays: Optional[Dict[str, float]] = None) -> None:
        self.failing = set(failing)
        self.delays = delays or {}
        self.calls: List[str] = []

    async def illustrate(self, recipe_title: str) -> GeneratedImage:
        self.calls.append(recipe_title)
        await asyncio.sleep(self.delays.get(recipe_title, 0))
        if recipe_title in self.failing:
            raise ModelInvocationError("Image generation failed or returned no media URL.")
        return GeneratedImage(imageDataUri=DISH_DATA_URI)


@pytest.fixture
def client():
    """Create test client."""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def fake_gateway():
    return FakeGateway()
