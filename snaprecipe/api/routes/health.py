"""Health check endpoint."""

from typing import Any, Dict

from fastapi import APIRouter

from snaprecipe.config import settings

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check() -> Dict[str, str]:
    """
    Health check endpoint.

    Returns:
        Health status
    """
    return {"status": "healthy"}


@router.get("/ready")
async def readiness_check() -> Dict[str, Any]:
    """
    Readiness check.
    Reports whether the Gemini dependency is configured.
    """
    return {
        "status": "ready",
        "dependencies": {
            "gemini": {
                "configured": bool(settings.gemini_api_key),
                "text_model": settings.gemini_text_model,
                "image_model": settings.gemini_image_model,
            },
        },
    }
