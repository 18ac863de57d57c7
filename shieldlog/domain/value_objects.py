"""Value objects for shieldlog interceptors."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


class LogLevel(Enum):
    """Severity of a structured log entry, ordered lowest first."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERR = "err"

    @property
    def severity(self) -> int:
        """Return the standard library logging level for this severity."""
        return _SEVERITIES[self]

    @property
    def method_name(self) -> str:
        """Return the structlog method used to emit at this level."""
        return logging.getLevelName(self.severity).lower()

    def __lt__(self, other: "LogLevel") -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.severity < other.severity

    def __le__(self, other: "LogLevel") -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.severity <= other.severity

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """
        Parse a level name.

        Accepts both the short names (``warn``, ``err``) and the standard
        logging names (``WARNING``, ``ERROR``), case-insensitively.

        Raises:
            ValueError: If the name is not a known level
        """
        normalized = name.strip().lower()
        aliases = {"warning": "warn", "error": "err", "critical": "err"}
        return cls(aliases.get(normalized, normalized))


_SEVERITIES = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERR: logging.ERROR,
}


class MiddlewareResult(Enum):
    """Signal returned by pre-request hooks."""

    PROCEED = "proceed"  # Continue to next hook / handler
    ABORT = "abort"  # Stop processing and answer without the handler


@dataclass(frozen=True)
class LoggingConfig:
    """Request/response logging configuration.

    Built once at startup and published into the runtime state. ``log_body``
    is carried for callers that inspect the config; the interceptors do not
    read it.
    """

    log_requests: bool = True
    log_responses: bool = True
    log_body: bool = False
    exclude_paths: Tuple[str, ...] = field(default_factory=tuple)
    request_log_level: LogLevel = LogLevel.INFO
    response_log_level: LogLevel = LogLevel.INFO

    def __post_init__(self) -> None:
        if isinstance(self.exclude_paths, str):
            raise ValueError("exclude_paths must be a sequence of prefixes, not a string")
        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "exclude_paths", tuple(self.exclude_paths))
        for prefix in self.exclude_paths:
            if not isinstance(prefix, str):
                raise ValueError("exclude_paths entries must be strings")
        for name in ("request_log_level", "response_log_level"):
            if not isinstance(getattr(self, name), LogLevel):
                raise ValueError(f"{name} must be a LogLevel")


@dataclass(frozen=True)
class SecurityHeadersConfig:
    """Security header toggles, owned by a single middleware instance."""

    enable_content_type_options: bool = True
    enable_frame_options: bool = True
    enable_xss_protection: bool = True
    enable_hsts: bool = True
    hsts_max_age: int = 31536000  # 1 year
    enable_referrer_policy: bool = True
    referrer_policy: str = "strict-origin-when-cross-origin"
    enable_csp: bool = False
    csp_policy: str = "default-src 'self'"
    enable_permissions_policy: bool = False
    permissions_policy: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.hsts_max_age, bool) or not isinstance(self.hsts_max_age, int):
            raise ValueError("hsts_max_age must be an integer")
        if self.hsts_max_age < 0:
            raise ValueError("hsts_max_age must not be negative")
        for name in ("referrer_policy", "csp_policy", "permissions_policy"):
            if not isinstance(getattr(self, name), str):
                raise ValueError(f"{name} must be a string")

    @classmethod
    def disabled(cls) -> "SecurityHeadersConfig":
        """Return a config with every header turned off."""
        return cls(
            enable_content_type_options=False,
            enable_frame_options=False,
            enable_xss_protection=False,
            enable_hsts=False,
            enable_referrer_policy=False,
            enable_csp=False,
            enable_permissions_policy=False,
        )
