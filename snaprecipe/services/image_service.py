"""Uploaded image validation and conversion to an ingredient photo data URI."""

import io
import logging
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from snaprecipe.config import settings
from snaprecipe.utils.data_uri import build_data_uri
from snaprecipe.utils.exceptions import ImageProcessingError

logger = logging.getLogger(__name__)

SUPPORTED_MIME_TYPES = ("image/jpeg", "image/png", "image/webp", "image/gif")


class ImageService:
    """Service for processing uploaded images."""

    @staticmethod
    def validate_image(file_content: bytes, filename: str, max_size: Optional[int] = None) -> Tuple[bytes, str]:
        """
        Validate uploaded image.

        Args:
            file_content: Image file bytes
            filename: Original filename
            max_size: Size limit in bytes (defaults to settings.max_upload_size)

        Returns:
            Tuple of (image_bytes, mime_type)

        Raises:
            ImageProcessingError: If image is invalid
        """
        if not file_content:
            raise ImageProcessingError("Image file is empty")

        max_size = max_size or settings.max_upload_size
        if len(file_content) > max_size:
            raise ImageProcessingError(f"Image file too large (max {max_size / 1024 / 1024:g}MB)")

        mime_type = ImageService._detect_mime_type(file_content)

        if mime_type not in SUPPORTED_MIME_TYPES:
            logger.warning("Rejected upload %s with detected type %s", filename, mime_type)
            raise ImageProcessingError(
                f"Unsupported image format: {mime_type}. Supported: JPEG, PNG, WebP, GIF"
            )

        return file_content, mime_type

    @staticmethod
    def to_data_uri(file_content: bytes, filename: str, max_size: Optional[int] = None) -> str:
        """Validate an upload and encode it as ``data:<mime>;base64,<payload>``."""
        content, mime_type = ImageService.validate_image(file_content, filename, max_size=max_size)
        return build_data_uri(mime_type, content)

    @staticmethod
    def _detect_mime_type(file_content: bytes) -> str:
        """
        Detect MIME type from file content (magic bytes).

        Args:
            file_content: File bytes

        Returns:
            MIME type string
        """
        if file_content.startswith(b"\xff\xd8\xff"):
            return "image/jpeg"
        elif file_content.startswith(b"\x89PNG\r\n\x1a\n"):
            return "image/png"
        elif file_content.startswith(b"RIFF") and b"WEBP" in file_content[:12]:
            return "image/webp"
        elif file_content.startswith((b"GIF87a", b"GIF89a")):
            return "image/gif"

        # Fall back to Pillow for anything the signatures above miss
        try:
            with Image.open(io.BytesIO(file_content)) as image:
                fmt = image.format
        except (UnidentifiedImageError, OSError):
            return "application/octet-stream"
        return Image.MIME.get(fmt, "application/octet-stream") if fmt else "application/octet-stream"
