"""Recipe suggestion endpoints."""

import asyncio
import logging

from fastapi import APIRouter, Depends, File, Request, UploadFile

from snaprecipe.api.dependencies import get_idea_improver, get_illustrator, get_orchestrator
from snaprecipe.config import settings
from snaprecipe.models.recipe import (
    GeneratedImage,
    GenerateRecipeImageInput,
    ImproveRecipeIdeasInput,
    ImproveRecipeIdeasOutput,
    SuggestionResult,
    SuggestRecipesInput,
)
from snaprecipe.services.idea_improver import RecipeIdeaImprover
from snaprecipe.services.image_service import ImageService
from snaprecipe.services.recipe_illustrator import RecipeIllustrator
from snaprecipe.services.suggestion_orchestrator import SuggestionOrchestrator
from snaprecipe.utils.data_uri import describe_data_uri
from snaprecipe.utils.exceptions import SuggestionTimeoutError, UploadTooLargeError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/recipes", tags=["recipes"])


async def _run_pipeline(orchestrator: SuggestionOrchestrator, photo_data_uri: str) -> SuggestionResult:
    # Return before the hosting gateway kills the request, so the client still gets CORS headers.
    try:
        return await asyncio.wait_for(
            orchestrator.suggest(photo_data_uri),
            timeout=settings.suggest_timeout_seconds,
        )
    except asyncio.TimeoutError as e:
        raise SuggestionTimeoutError(
            f"Recipe suggestion took too long (> {settings.suggest_timeout_seconds:g}s). "
            "Try a smaller/clearer image or retry."
        ) from e


@router.post("/suggest", response_model=SuggestionResult, response_model_exclude_none=True)
async def suggest_recipes(
    request: Request,
    body: SuggestRecipesInput,
    orchestrator: SuggestionOrchestrator = Depends(get_orchestrator),
) -> SuggestionResult:
    """
    Suggest illustrated recipes for a photo of ingredients.

    - **photoDataUri**: `data:<mimetype>;base64,<encoded_data>`
    - Returns recipes in model order; `imageDataUri` is omitted for recipes whose
      illustration failed. An empty list means no recipes were found.
    """
    logger.info(
        "Route /recipes/suggest called",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "route": "/recipes/suggest",
            "params": {"photo": describe_data_uri(body.photoDataUri)},
        },
    )
    return await _run_pipeline(orchestrator, body.photoDataUri)


@router.post("/suggest-from-image", response_model=SuggestionResult, response_model_exclude_none=True)
async def suggest_recipes_from_image(
    request: Request,
    file: UploadFile = File(..., description="Photo of ingredients"),
    orchestrator: SuggestionOrchestrator = Depends(get_orchestrator),
) -> SuggestionResult:
    """
    Suggest illustrated recipes for an uploaded photo.

    - **file**: Image file (JPEG, PNG, WebP or GIF, max 5MB by default)
    """
    logger.info(
        "Route /recipes/suggest-from-image called",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "route": "/recipes/suggest-from-image",
            "params": {
                "filename": file.filename,
                "content_type": file.content_type,
                "size": getattr(file, "size", "unknown"),
            },
        },
    )

    image_data = await file.read()
    if len(image_data) > settings.max_upload_size:
        raise UploadTooLargeError(f"Max size is {settings.max_upload_size} bytes")

    photo_data_uri = ImageService.to_data_uri(image_data, file.filename or "image")
    return await _run_pipeline(orchestrator, photo_data_uri)


@router.post("/illustrate", response_model=GeneratedImage)
async def illustrate_recipe(
    request: Request,
    body: GenerateRecipeImageInput,
    illustrator: RecipeIllustrator = Depends(get_illustrator),
) -> GeneratedImage:
    """Generate an illustrative photo for a single recipe title."""
    logger.info(
        "Route /recipes/illustrate called",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "route": "/recipes/illustrate",
            "params": {"recipeTitle": body.recipeTitle[:200]},
        },
    )
    return await illustrator.illustrate(body.recipeTitle)


@router.post("/improve-ideas", response_model=ImproveRecipeIdeasOutput)
async def improve_recipe_ideas(
    request: Request,
    body: ImproveRecipeIdeasInput,
    improver: RecipeIdeaImprover = Depends(get_idea_improver),
) -> ImproveRecipeIdeasOutput:
    """Generate creative improvement ideas for a list of recipe suggestions."""
    logger.info(
        "Route /recipes/improve-ideas called",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "route": "/recipes/improve-ideas",
            "params": {"suggestions_count": len(body.recipeSuggestions)},
        },
    )
    return await improver.improve(body.recipeSuggestions)
