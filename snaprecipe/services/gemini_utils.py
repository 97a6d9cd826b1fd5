"""Shared helpers for Gemini responses, parsing, and debugging."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


def extract_first_json_value(text: str) -> str:
    """
    Best-effort extraction of a single JSON object/array from a model response.

    Handles:
    - markdown fences
    - leading/trailing prose
    - trailing garbage
    """
    t = (text or "").strip()
    if not t:
        return t

    # Remove markdown fences
    t = re.sub(r"^```(?:json)?\s*", "", t, flags=re.IGNORECASE | re.MULTILINE)
    t = re.sub(r"\s*```\s*$", "", t, flags=re.MULTILINE).strip()

    if (t.startswith("{") and t.endswith("}")) or (t.startswith("[") and t.endswith("]")):
        return t

    first_obj = t.find("{")
    first_arr = t.find("[")
    if first_obj == -1 and first_arr == -1:
        return t

    start = first_obj
    if start == -1 or (first_arr != -1 and first_arr < start):
        start = first_arr

    end = max(t.rfind("}"), t.rfind("]"))
    if end > start:
        return t[start : end + 1].strip()

    return t


def _strip_trailing_commas(json_text: str) -> str:
    # Converts: {"a": 1,} -> {"a": 1}
    # and: [1,2,] -> [1,2]
    return re.sub(r",(\s*[}\]])", r"\1", json_text)


def safe_json_loads(text: str) -> Any:
    """
    Parse JSON with tolerant extraction and a tiny local "repair" (trailing commas).
    Raises json.JSONDecodeError if still invalid.
    """
    json_text = extract_first_json_value(text).strip()

    try:
        return json.loads(json_text)
    except json.JSONDecodeError:
        return json.loads(_strip_trailing_commas(json_text))


def _iter_parts(response: Any):
    parts = getattr(response, "parts", None)
    if parts:
        yield from parts
        return

    candidates = getattr(response, "candidates", None) or []
    if candidates:
        content = getattr(candidates[0], "content", None)
        yield from (getattr(content, "parts", None) or [])


def get_response_text(response: Any) -> str:
    """
    Robust extraction of text from google-genai responses.

    Tries:
    1) response.text
    2) response.parts[*].text
    3) response.candidates[0].content.parts[*].text
    """
    try:
        t = getattr(response, "text", None)
        if isinstance(t, str) and t.strip():
            return t
    except ValueError:
        # Older SDKs raise when the response has no text parts
        pass

    for p in _iter_parts(response):
        pt = p.get("text") if isinstance(p, dict) else getattr(p, "text", None)
        if isinstance(pt, str) and pt.strip():
            return pt

    return ""


def find_inline_image(response: Any) -> Optional[Tuple[str, bytes]]:
    """
    Return (mime_type, bytes) of the first inline image part, if any.

    Image-capable models answer with a mix of text and inline_data parts.
    """
    for p in _iter_parts(response):
        inline = getattr(p, "inline_data", None)
        if inline is None:
            continue
        mime_type = getattr(inline, "mime_type", None) or ""
        data = getattr(inline, "data", None)
        if data and mime_type.startswith("image/"):
            return mime_type, data
    return None


def response_debug_summary(response: Any) -> Dict[str, Any]:
    """
    Safe, compact debug info (no huge dumps).
    Helps explain "HTTP 200 but empty text".
    """
    out: Dict[str, Any] = {}

    candidates = getattr(response, "candidates", None) or []
    out["candidates"] = len(candidates)
    if candidates:
        c0 = candidates[0]
        out["finish_reason"] = str(getattr(c0, "finish_reason", None))
        out["safety_ratings"] = str(getattr(c0, "safety_ratings", None))
        content = getattr(c0, "content", None)
        out["parts"] = len(getattr(content, "parts", None) or [])

    feedback = getattr(response, "prompt_feedback", None)
    if feedback is not None:
        out["prompt_feedback"] = str(feedback)

    return out


def log_empty_response(prefix: str, response: Any) -> None:
    summary = response_debug_summary(response)
    logger.warning(f"{prefix} empty response. summary={summary}")
