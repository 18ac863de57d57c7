"""
Request context for structured logging.
"""

import uuid
from contextvars import ContextVar
from typing import Optional

import structlog

_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def generate_request_id() -> str:
    """Generate a unique request ID."""
    return f"req_{uuid.uuid4().hex[:12]}"


def get_request_id() -> Optional[str]:
    """Get the current request ID from context."""
    return _request_id.get()


def bind_request_context(request_id: Optional[str] = None) -> str:
    """
    Bind a request ID to the current context.

    Every log event emitted in this context carries ``request_id``.

    Args:
        request_id: Incoming request ID; generated when missing

    Returns:
        The bound request ID
    """
    req_id = request_id or generate_request_id()
    _request_id.set(req_id)
    structlog.contextvars.bind_contextvars(request_id=req_id)
    return req_id


def clear_request_context() -> None:
    """Remove request context bound by ``bind_request_context``."""
    structlog.contextvars.unbind_contextvars("request_id")
    _request_id.set(None)
