"""
Structured logging for shieldlog.

This module provides:
- structlog configuration with a stdlib bridge
- Request ID helpers bound through context variables
- Redaction of credentials in log events
"""

from .factory import EnvironmentAdder, configure_logging, get_logger
from .sanitizers import RedactionProcessor, redact_query_string, redact_text, sanitize_for_log
from .context import (
    bind_request_context,
    clear_request_context,
    generate_request_id,
    get_request_id,
)

__all__ = [
    "EnvironmentAdder",
    "configure_logging",
    "get_logger",
    "RedactionProcessor",
    "redact_query_string",
    "redact_text",
    "sanitize_for_log",
    "bind_request_context",
    "clear_request_context",
    "generate_request_id",
    "get_request_id",
]
