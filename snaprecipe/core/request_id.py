"""Request ID generation and management."""

import uuid
from contextvars import ContextVar

# Request ID of the request being handled; copied into pipeline tasks with the context
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def generate_request_id() -> str:
    return uuid.uuid4().hex


def get_request_id() -> str:
    """Get current request ID from context."""
    return request_id_var.get("")


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)
