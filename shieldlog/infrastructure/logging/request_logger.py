"""Structlog-backed request logger.

Builds one entry per request carrying method, path and request ID.
Entries below the logger's minimum level are still built, but ``log()``
drops them.
"""

from typing import Any, Dict, Optional

from shieldlog.application.ports import LogEntry, RequestLogger, RequestPort
from shieldlog.domain.errors import LogEntryError
from shieldlog.domain.value_objects import LogLevel
from shieldlog.shared.logging import generate_request_id, get_logger, get_request_id

REQUEST_ID_HEADER = "x-request-id"


class StructlogLogEntry(LogEntry):
    """A log entry waiting to be emitted through a structlog logger."""

    def __init__(self, logger: Any, level: LogLevel, message: str, fields: Dict[str, Any], enabled: bool = True):
        self._logger = logger
        self.level = level
        self.message = message
        self.fields = fields
        self.enabled = enabled

    def log(self) -> None:
        if not self.enabled:
            return
        emit = getattr(self._logger, self.level.method_name)
        emit(self.message, **self.fields)

    def __repr__(self) -> str:
        return f"StructlogLogEntry({self.level.value}, {self.message!r})"


class StructlogRequestLogger(RequestLogger):
    """Request logger emitting through ``shieldlog.shared.logging``."""

    def __init__(self, name: str = "shieldlog.requests", min_level: LogLevel = LogLevel.DEBUG):
        self.name = name
        self.min_level = min_level
        self._logger = get_logger(name)

    def from_request(self, request: RequestPort, level: LogLevel, message: str) -> StructlogLogEntry:
        """
        Build an entry describing ``request``.

        Raises:
            LogEntryError: If the level, message or request path is unusable
        """
        if not isinstance(level, LogLevel):
            raise LogEntryError(f"Unsupported log level: {level!r}")
        if not isinstance(message, str):
            raise LogEntryError("Log message must be a string")

        path = getattr(request, "path", None)
        if not isinstance(path, str):
            raise LogEntryError("Request has no usable path")

        fields: Dict[str, Any] = {
            "method": getattr(request, "method", None),
            "path": path,
            "request_id": self._request_id(request),
        }
        query = getattr(request, "query", None)
        if query:
            fields["query"] = query

        return StructlogLogEntry(
            self._logger,
            level,
            message,
            fields,
            enabled=self.min_level <= level,
        )

    @staticmethod
    def _request_id(request: RequestPort) -> str:
        headers: Optional[Any] = getattr(request, "headers", None)
        incoming = headers.get(REQUEST_ID_HEADER) if headers is not None else None
        return incoming or get_request_id() or generate_request_id()
