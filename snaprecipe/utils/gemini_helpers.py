"""Shared Gemini API helper utilities."""

from functools import lru_cache
from typing import Any, Dict

# Keys Gemini's responseSchema rejects, plus Pydantic metadata we don't need to send
_DROPPED_SCHEMA_KEYS = (
    "additionalProperties", "additional_properties", "title", "description",
    "examples", "example", "$defs", "default", "minLength", "maxLength",
)


def clean_schema_for_gemini(schema: Dict[str, Any]) -> Dict[str, Any]:
    """
    Clean Pydantic JSON schema for Gemini responseSchema format.
    - Resolves $ref references to their definitions (Gemini doesn't support $ref)
    - Removes 'additionalProperties' and string length constraints
    - Removes Pydantic metadata fields (title, description, examples, $defs)
    - Handles anyOf for Optional fields (extracts the non-null type)
    """
    defs = schema.get("$defs", {})

    def resolve_ref(ref: str) -> Dict[str, Any]:
        """Resolve a $ref to its definition."""
        if ref.startswith("#/$defs/"):
            def_name = ref[len("#/$defs/"):]
            if def_name in defs:
                return defs[def_name]
        return {}

    def clean(s: Dict[str, Any]) -> Dict[str, Any]:
        if not isinstance(s, dict):
            return s

        if "$ref" in s:
            return clean(resolve_ref(s["$ref"]))

        result: Dict[str, Any] = {}

        for key, value in s.items():
            if key in _DROPPED_SCHEMA_KEYS:
                continue

            if isinstance(value, dict):
                # "properties" maps field names to schemas; keep every name
                if key == "properties":
                    result[key] = {name: clean(prop) for name, prop in value.items()}
                else:
                    result[key] = clean(value)
            elif isinstance(value, list):
                result[key] = [clean(item) if isinstance(item, dict) else item for item in value]
            else:
                result[key] = value

        if "anyOf" in result:
            any_of = result.pop("anyOf")
            for option in any_of:
                if isinstance(option, dict) and option.get("type") != "null":
                    result.update(option)
                    break

        return result

    return clean(schema)


@lru_cache(maxsize=1)
def get_recipe_batch_schema() -> dict:
    """Return the RecipeBatch JSON schema cleaned for Gemini, cached."""
    from snaprecipe.models.recipe import RecipeBatch
    return clean_schema_for_gemini(RecipeBatch.model_json_schema())


@lru_cache(maxsize=1)
def get_improved_ideas_schema() -> dict:
    """Return the ImproveRecipeIdeasOutput JSON schema cleaned for Gemini, cached."""
    from snaprecipe.models.recipe import ImproveRecipeIdeasOutput
    return clean_schema_for_gemini(ImproveRecipeIdeasOutput.model_json_schema())
