"""Application ports (interfaces) for shieldlog.

This module defines the contracts between the interceptors and the host
framework's request, response and logger objects.
"""

from abc import ABC, abstractmethod
from typing import Any, Protocol, TypeVar, runtime_checkable

from shieldlog.domain.value_objects import LogLevel

R = TypeVar("R", bound="ResponsePort")


@runtime_checkable
class RequestPort(Protocol):
    """Request handle as seen by pre-request hooks."""

    path: str

    def set(self, key: str, value: Any) -> None:
        """Attach request-scoped data; raises AnnotationError on failure."""
        ...

    def get(self, key: str, default: Any = None) -> Any:
        ...


@runtime_checkable
class ResponsePort(Protocol):
    """Outgoing response as seen by response hooks."""

    def with_header(self: R, name: str, value: str) -> R:
        """Return the response with the header set."""
        ...


class LogEntry(ABC):
    """A built, not yet emitted, log entry."""

    @abstractmethod
    def log(self) -> None:
        """Emit the entry."""
        pass


class RequestLogger(ABC):
    """Port for building log entries from requests."""

    @abstractmethod
    def from_request(self, request: RequestPort, level: LogLevel, message: str) -> LogEntry:
        """
        Build a log entry describing a request.

        Args:
            request: Request being logged
            level: Severity of the entry
            message: Event message

        Returns:
            Entry ready to be emitted

        Raises:
            LogEntryError: If the entry cannot be built
        """
        pass
