"""Errors raised by shieldlog interceptors and their collaborators."""


class ShieldlogError(Exception):
    """Base exception for all shieldlog errors."""

    def __init__(self, message: str) -> None:
        """
        Initialize shieldlog error.

        Args:
            message: Error message (must be PII-safe)
        """
        super().__init__(message)
        self.message = message


class AnnotationError(ShieldlogError):
    """Raised when a value cannot be attached to a request."""

    def __init__(self, key: str, reason: str) -> None:
        """
        Initialize annotation error.

        Args:
            key: Request-scoped key being attached
            reason: Why the value could not be attached
        """
        super().__init__(f"Cannot attach '{key}' to request: {reason}")
        self.key = key
        self.reason = reason


class LogEntryError(ShieldlogError):
    """Raised when a log entry cannot be built from a request."""


class HeaderFormatError(ShieldlogError):
    """Raised when a header value cannot be formatted."""

    def __init__(self, header: str, reason: str) -> None:
        super().__init__(f"Cannot format {header}: {reason}")
        self.header = header
        self.reason = reason


class ConfigurationError(ShieldlogError):
    """Raised when settings contain an invalid value."""

    def __init__(self, field: str, message: str) -> None:
        """
        Initialize configuration error.

        Args:
            field: Setting name that failed validation
            message: Error message
        """
        super().__init__(f"{field}: {message}")
        self.field = field
        self.validation_message = message


class ChainFullError(ShieldlogError):
    """Raised when more hooks are registered than a chain phase can hold."""

    def __init__(self, phase: str, limit: int) -> None:
        super().__init__(f"Cannot register more than {limit} {phase} hooks")
        self.phase = phase
        self.limit = limit
