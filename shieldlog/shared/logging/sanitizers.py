"""
Credential redaction for log events.
"""

import re
from typing import Any
from urllib.parse import parse_qsl, urlencode

from structlog.types import EventDict, WrappedLogger

REDACTED = "***REDACTED***"

# Field name patterns that should never reach a log sink
SENSITIVE_PATTERNS = [
    r"password",
    r"pwd",
    r"secret",
    r"token",
    r"api_key",
    r"apikey",
    r"authorization",
    r"cookie",
    r"credential",
    r"session",
]

_SENSITIVE_RE = re.compile("|".join(SENSITIVE_PATTERNS))

# key=value pairs inside free text, e.g. URLs in third-party log messages
_INLINE_PAIR_RE = re.compile(
    r"([\w.-]*(?:%s)[\w.-]*)=([^&\s\"']+)" % "|".join(SENSITIVE_PATTERNS),
    re.IGNORECASE,
)


class RedactionProcessor:
    """
    Structlog processor that masks credentials in log events.
    """

    def __call__(
        self,
        logger: WrappedLogger,
        name: str,
        event_dict: EventDict,
    ) -> EventDict:
        return sanitize_for_log(event_dict)


def sanitize_for_log(data: dict[str, Any]) -> dict[str, Any]:
    """
    Sanitize a dictionary for logging.

    Args:
        data: Dictionary to sanitize

    Returns:
        Copy with sensitive fields, query parameters and inline
        ``name=value`` credentials masked
    """
    sanitized = {}

    for key, value in data.items():
        if _is_sensitive_field(key):
            sanitized[key] = REDACTED
        elif key == "query" and isinstance(value, str):
            sanitized[key] = redact_query_string(value)
        elif isinstance(value, str):
            sanitized[key] = redact_text(value)
        elif isinstance(value, dict):
            sanitized[key] = sanitize_for_log(value)
        else:
            sanitized[key] = value

    return sanitized


def redact_query_string(query: str) -> str:
    """Mask values of sensitive query parameters, keeping their names."""
    if not query:
        return query
    pairs = parse_qsl(query, keep_blank_values=True)
    return urlencode(
        [(k, REDACTED if _is_sensitive_field(k) else v) for k, v in pairs],
        safe="*",
    )


def _is_sensitive_field(field_name: str) -> bool:
    """Check if a field name indicates sensitive data."""
    return bool(_SENSITIVE_RE.search(field_name.lower()))


def redact_text(text: str) -> str:
    """Mask sensitive ``name=value`` pairs embedded in free text."""
    if "=" not in text:
        return text
    return _INLINE_PAIR_RE.sub(lambda m: f"{m.group(1)}={REDACTED}", text)
