"""FastAPI application entry point."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from snaprecipe.api.routes import health, recipes
from snaprecipe.config import settings
from snaprecipe.core.request_id import get_request_id
from snaprecipe.middleware.logging import RequestLoggingMiddleware, summarize_payload
from snaprecipe.middleware.performance import PerformanceMiddleware
from snaprecipe.middleware.security import SecurityHeadersMiddleware, setup_compression, setup_cors
from snaprecipe.utils.exceptions import (
    ImageProcessingError,
    ModelInvocationError,
    SchemaValidationError,
    SnapRecipeException,
    SuggestionTimeoutError,
    UploadTooLargeError,
    ValidationError,
)
from snaprecipe.utils.logging_config import setup_logging

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="SnapRecipe API",
    description="AI powered recipe suggestions from a photo of your ingredients",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors with detailed messages."""
    request_id = get_request_id()
    # Validation errors echo the input; never send or log a whole photo back
    errors = summarize_payload(jsonable_encoder(exc.errors()))

    logger.warning(
        "Request validation failed",
        extra={
            "request_id": request_id,
            "path": request.url.path,
            "method": request.method,
            "errors": errors,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Validation error",
            "detail": errors,
            "request_id": request_id,
            "message": "Request validation failed. Check the 'detail' field for specific errors.",
        },
    )


def _status_for(exc: SnapRecipeException):
    if isinstance(exc, (ValidationError, ImageProcessingError)):
        return status.HTTP_400_BAD_REQUEST, "Invalid input"
    if isinstance(exc, UploadTooLargeError):
        return status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, "File too large"
    if isinstance(exc, SuggestionTimeoutError):
        return status.HTTP_504_GATEWAY_TIMEOUT, "Timeout"
    if isinstance(exc, SchemaValidationError):
        return status.HTTP_502_BAD_GATEWAY, "Unexpected AI model response"
    if isinstance(exc, ModelInvocationError):
        return status.HTTP_502_BAD_GATEWAY, "AI model error"
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"


@app.exception_handler(SnapRecipeException)
async def snaprecipe_exception_handler(request: Request, exc: SnapRecipeException) -> JSONResponse:
    """Handle custom SnapRecipe exceptions."""
    request_id = get_request_id()
    status_code, error_message = _status_for(exc)

    log = logger.warning if status_code < 500 else logger.error
    log(
        f"Exception: {error_message}",
        extra={"request_id": request_id, "exception": str(exc), "exception_type": type(exc).__name__},
        exc_info=status_code >= 500,
    )

    return JSONResponse(
        status_code=status_code,
        content={
            "error": error_message,
            "detail": str(exc),
            "request_id": request_id,
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    request_id = get_request_id()

    logger.error(
        f"Unexpected exception: {str(exc)}",
        extra={"request_id": request_id},
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": "An unexpected error occurred",
            "request_id": request_id,
        },
    )


# Add middleware (order matters: last added runs first)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    PerformanceMiddleware,
    slow_request_threshold=settings.slow_request_threshold,
    very_slow_request_threshold=settings.very_slow_request_threshold,
)
app.add_middleware(RequestLoggingMiddleware)
setup_compression(app)
setup_cors(app)

app.include_router(health.router)
app.include_router(recipes.router)


@app.on_event("startup")
async def startup_event():
    """Application startup event."""
    logger.info("SnapRecipe API starting up...")
    logger.info(f"Log level: {settings.log_level}")
    logger.info(f"Models: text={settings.gemini_text_model} image={settings.gemini_image_model}")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "SnapRecipe API",
        "version": "1.0.0",
        "docs": "/docs",
    }
