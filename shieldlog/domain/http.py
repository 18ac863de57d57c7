"""Framework-neutral request and response values.

Host frameworks supply their own request/response objects through the
adapters in ``shieldlog.infrastructure.middleware``; these plain values are
used where no host is involved (direct calls, tests, other servers).
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Tuple

from shieldlog.domain.errors import AnnotationError


class InterceptedRequest:
    """Request handle with a request-lifetime context store."""

    def __init__(
        self,
        path: str,
        method: str = "GET",
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.path = path
        self.method = method.upper()
        self.headers = {k.lower(): v for k, v in (headers or {}).items()}
        self._context: Dict[str, Any] = {}

    def set(self, key: str, value: Any) -> None:
        """
        Attach a value to the request for the rest of its lifetime.

        Raises:
            AnnotationError: If the key is empty
        """
        if not key:
            raise AnnotationError(key, "empty key")
        self._context[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Return a previously attached value."""
        return self._context.get(key, default)

    @property
    def context(self) -> Dict[str, Any]:
        """Copy of all attached values."""
        return dict(self._context)

    def __repr__(self) -> str:
        return f"InterceptedRequest({self.method} {self.path!r})"


@dataclass(frozen=True)
class InterceptedResponse:
    """Immutable response value; ``with_header`` returns an updated copy."""

    status_code: int = 200
    body: bytes = b""
    header_items: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    @classmethod
    def ok(cls, body: bytes = b"") -> "InterceptedResponse":
        return cls(status_code=200, body=body)

    def with_header(self, name: str, value: str) -> "InterceptedResponse":
        """Return a copy with ``name`` set to ``value``, replacing any same-named header."""
        lowered = name.lower()
        kept = tuple((k, v) for k, v in self.header_items if k.lower() != lowered)
        return replace(self, header_items=kept + ((name, value),))

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for key, value in self.header_items:
            if key.lower() == lowered:
                return value
        return None

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self.header_items)
