"""Tests for the Gemini gateway against a fake google-genai client."""

import asyncio
from types import SimpleNamespace

import pytest

from conftest import DISH_DATA_URI, JPEG_BYTES, PNG_BYTES
from snaprecipe.services.gemini_service import GeminiGateway
from snaprecipe.services.gemini_utils import extract_first_json_value, safe_json_loads
from snaprecipe.utils.data_uri import DataUri
from snaprecipe.utils.exceptions import ModelInvocationError, SchemaValidationError


class FakeModels:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def generate_content(self, *, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error is not None:
            raise self.error
        return self.response


def make_gateway(response=None, error=None):
    models = FakeModels(response=response, error=error)
    return GeminiGateway(client=SimpleNamespace(models=models)), models


def run(coro):
    return asyncio.run(coro)


def test_structured_generation_parses_json():
    gateway, models = make_gateway(SimpleNamespace(text='```json\n{"recipes": []}\n```'))

    value = run(
        gateway.generate_structured(
            prompt="Suggest recipes",
            schema={"type": "object"},
            image=DataUri(mime_type="image/jpeg", data=JPEG_BYTES),
            model="gemini-test",
        )
    )

    assert value == {"recipes": []}
    call = models.calls[0]
    assert call["model"] == "gemini-test"
    assert call["config"].response_mime_type == "application/json"
    assert call["contents"][0] == "Suggest recipes"
    assert call["contents"][1].inline_data.mime_type == "image/jpeg"


def test_structured_generation_without_image_sends_text_only():
    gateway, models = make_gateway(SimpleNamespace(text='{"improvedRecipeIdeas": []}'))

    run(gateway.generate_structured(prompt="Improve", schema={"type": "object"}))

    assert models.calls[0]["contents"] == "Improve"


def test_structured_generation_empty_output_is_none():
    gateway, _ = make_gateway(SimpleNamespace(text="", candidates=[]))
    assert run(gateway.generate_structured(prompt="p", schema={})) is None


def test_structured_generation_invalid_json():
    gateway, _ = make_gateway(SimpleNamespace(text="Sorry, I cannot help with that."))
    with pytest.raises(SchemaValidationError):
        run(gateway.generate_structured(prompt="p", schema={}))


def test_sdk_failure_becomes_model_invocation_error():
    gateway, _ = make_gateway(error=RuntimeError("429 RESOURCE_EXHAUSTED"))
    with pytest.raises(ModelInvocationError, match="RESOURCE_EXHAUSTED"):
        run(gateway.generate_structured(prompt="p", schema={}))


def test_image_generation_builds_data_uri():
    parts = [
        SimpleNamespace(text="Here is your dish", inline_data=None),
        SimpleNamespace(text=None, inline_data=SimpleNamespace(mime_type="image/png", data=PNG_BYTES)),
    ]
    gateway, models = make_gateway(SimpleNamespace(text=None, parts=parts))

    media = run(gateway.generate_image(prompt="Draw pasta"))

    assert media.url == DISH_DATA_URI
    assert media.content_type == "image/png"
    assert models.calls[0]["config"].response_modalities == ["TEXT", "IMAGE"]


def test_image_generation_without_image_part_is_none():
    parts = [SimpleNamespace(text="I can't draw that", inline_data=None)]
    gateway, _ = make_gateway(SimpleNamespace(text="I can't draw that", parts=parts))
    assert run(gateway.generate_image(prompt="Draw")) is None


def test_extract_first_json_value_handles_prose():
    assert extract_first_json_value('Sure! {"a": 1} Enjoy.') == '{"a": 1}'
    assert safe_json_loads('{"a": [1, 2,],}') == {"a": [1, 2]}
