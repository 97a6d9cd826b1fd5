"""Custom exception classes."""


class SnapRecipeException(Exception):
    """Base exception for SnapRecipe application."""

    pass


class ValidationError(SnapRecipeException):
    """Raised when input validation fails."""

    pass


class ImageProcessingError(SnapRecipeException):
    """Raised when uploaded image processing fails."""

    pass


class ModelInvocationError(SnapRecipeException):
    """Raised when a Gemini call fails, times out or returns no media."""

    pass


class SchemaValidationError(ModelInvocationError):
    """Raised when a Gemini response does not match the expected shape."""

    pass


class UploadTooLargeError(SnapRecipeException):
    """Raised when an uploaded photo exceeds the configured size limit."""

    pass


class SuggestionTimeoutError(SnapRecipeException):
    """Raised when the suggestion pipeline does not finish in time."""

    pass
