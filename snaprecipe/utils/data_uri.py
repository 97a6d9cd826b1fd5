"""Data URI helpers (``data:<mime>;base64,<payload>``)."""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass

from snaprecipe.utils.exceptions import ValidationError

_DATA_URI_RE = re.compile(
    r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)(?P<params>(?:;[\w.+-]+=[\w.+-]+)*);base64,(?P<data>.*)$",
    re.DOTALL,
)


@dataclass(frozen=True)
class DataUri:
    """Decoded data URI."""

    mime_type: str
    data: bytes

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")


def parse_data_uri(value: str) -> DataUri:
    """
    Parse a base64 data URI.

    Raises:
        ValidationError: If the value is not a well-formed base64 data URI
    """
    if not value or not isinstance(value, str):
        raise ValidationError("Data URI must be a non-empty string")

    match = _DATA_URI_RE.match(value.strip())
    if not match:
        raise ValidationError("Expected format: 'data:<mimetype>;base64,<encoded_data>'")

    payload = re.sub(r"\s+", "", match.group("data"))
    if not payload:
        raise ValidationError("Data URI payload is empty")

    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError(f"Data URI payload is not valid base64: {str(e)}") from e

    return DataUri(mime_type=match.group("mime").lower(), data=data)


def parse_image_data_uri(value: str) -> DataUri:
    """Parse a data URI and require an ``image/*`` MIME type."""
    parsed = parse_data_uri(value)
    if not parsed.is_image:
        raise ValidationError(f"Data URI must carry an image MIME type, got {parsed.mime_type}")
    return parsed


def build_data_uri(mime_type: str, data: bytes) -> str:
    encoded = base64.b64encode(data).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def describe_data_uri(value: str) -> str:
    """Short, log-safe summary of a data URI (never the payload itself)."""
    if not isinstance(value, str):
        return "<not a string>"
    header, _, payload = value.partition(",")
    return f"{header[:64]},<{len(payload)} chars>"
