"""Environment-driven settings for the shieldlog interceptors."""

import os
from enum import Enum
from typing import Mapping, Optional

from shieldlog.domain.errors import ConfigurationError
from shieldlog.domain.value_objects import LoggingConfig, LogLevel, SecurityHeadersConfig

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


class Environment(Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"


class Settings:
    """Settings read from environment variables (or any string mapping)."""

    def __init__(self, source: Optional[Mapping[str, str]] = None):
        """Initialize settings from ``source`` (defaults to ``os.environ``)."""
        self.source = os.environ if source is None else source
        self._load_config()

    def _load_config(self) -> None:
        """Load settings from the source mapping."""
        # Environment
        env_name = self.source.get("ENVIRONMENT", "development").lower()
        try:
            self.ENVIRONMENT = Environment(env_name)
        except ValueError:
            raise ConfigurationError("ENVIRONMENT", f"unknown environment '{env_name}'") from None

        # Logging output
        self.LOG_LEVEL = self.source.get("LOG_LEVEL", "INFO").upper()
        self.LOG_FORMAT = self.source.get("LOG_FORMAT", "json").lower()
        if self.LOG_FORMAT not in ("json", "console"):
            raise ConfigurationError("LOG_FORMAT", "must be 'json' or 'console'")

        # Request logging
        self.LOG_REQUESTS = self._bool("LOG_REQUESTS", True)
        self.LOG_RESPONSES = self._bool("LOG_RESPONSES", True)
        self.LOG_BODY = self._bool("LOG_BODY", False)
        exclude = self.source.get("LOG_EXCLUDE_PATHS", "")
        self.LOG_EXCLUDE_PATHS = tuple(p.strip() for p in exclude.split(",") if p.strip())
        self.REQUEST_LOG_LEVEL = self._level("REQUEST_LOG_LEVEL")
        self.RESPONSE_LOG_LEVEL = self._level("RESPONSE_LOG_LEVEL")

        # Security headers
        defaults = SecurityHeadersConfig()
        self.SECURITY_HEADERS_ENABLED = self._bool("SECURITY_HEADERS_ENABLED", True)
        self.CONTENT_TYPE_OPTIONS_ENABLED = self._bool(
            "CONTENT_TYPE_OPTIONS_ENABLED", defaults.enable_content_type_options
        )
        self.FRAME_OPTIONS_ENABLED = self._bool("FRAME_OPTIONS_ENABLED", defaults.enable_frame_options)
        self.XSS_PROTECTION_ENABLED = self._bool("XSS_PROTECTION_ENABLED", defaults.enable_xss_protection)
        self.HSTS_ENABLED = self._bool("HSTS_ENABLED", defaults.enable_hsts)
        self.HSTS_MAX_AGE = self._int("HSTS_MAX_AGE", defaults.hsts_max_age)
        self.REFERRER_POLICY = self.source.get("REFERRER_POLICY", defaults.referrer_policy)
        self.CSP_ENABLED = self._bool("CSP_ENABLED", defaults.enable_csp)
        self.CSP_POLICY = self.source.get("CSP_POLICY", defaults.csp_policy)
        self.PERMISSIONS_POLICY_ENABLED = self._bool(
            "PERMISSIONS_POLICY_ENABLED", defaults.enable_permissions_policy
        )
        self.PERMISSIONS_POLICY = self.source.get("PERMISSIONS_POLICY", defaults.permissions_policy)

    def validate(self) -> None:
        """Validate environment-specific rules."""
        if self.ENVIRONMENT == Environment.PRODUCTION:
            if not self.SECURITY_HEADERS_ENABLED:
                raise ConfigurationError(
                    "SECURITY_HEADERS_ENABLED", "security headers must be enabled in production"
                )
            if self.LOG_BODY:
                raise ConfigurationError("LOG_BODY", "body logging is not allowed in production")

    def logging_config(self) -> LoggingConfig:
        return LoggingConfig(
            log_requests=self.LOG_REQUESTS,
            log_responses=self.LOG_RESPONSES,
            log_body=self.LOG_BODY,
            exclude_paths=self.LOG_EXCLUDE_PATHS,
            request_log_level=self.REQUEST_LOG_LEVEL,
            response_log_level=self.RESPONSE_LOG_LEVEL,
        )

    def security_headers_config(self) -> SecurityHeadersConfig:
        """Build the header config; every toggle is off when headers are disabled."""
        if not self.SECURITY_HEADERS_ENABLED:
            return SecurityHeadersConfig.disabled()
        return SecurityHeadersConfig(
            enable_content_type_options=self.CONTENT_TYPE_OPTIONS_ENABLED,
            enable_frame_options=self.FRAME_OPTIONS_ENABLED,
            enable_xss_protection=self.XSS_PROTECTION_ENABLED,
            enable_hsts=self.HSTS_ENABLED,
            hsts_max_age=self.HSTS_MAX_AGE,
            enable_referrer_policy=bool(self.REFERRER_POLICY),
            referrer_policy=self.REFERRER_POLICY,
            enable_csp=self.CSP_ENABLED,
            csp_policy=self.CSP_POLICY,
            enable_permissions_policy=self.PERMISSIONS_POLICY_ENABLED,
            permissions_policy=self.PERMISSIONS_POLICY,
        )

    @property
    def json_logs(self) -> bool:
        return self.LOG_FORMAT == "json"

    def _bool(self, key: str, default: bool) -> bool:
        raw = self.source.get(key)
        if raw is None:
            return default
        value = raw.strip().lower()
        if value in _TRUE:
            return True
        if value in _FALSE:
            return False
        raise ConfigurationError(key, f"expected a boolean, got '{raw}'")

    def _int(self, key: str, default: int) -> int:
        raw = self.source.get(key)
        if raw is None:
            return default
        try:
            value = int(raw)
        except ValueError:
            raise ConfigurationError(key, f"expected an integer, got '{raw}'") from None
        if value < 0:
            raise ConfigurationError(key, "must not be negative")
        return value

    def _level(self, key: str) -> LogLevel:
        raw = self.source.get(key, "info")
        try:
            return LogLevel.from_name(raw)
        except ValueError:
            raise ConfigurationError(key, f"unknown log level '{raw}'") from None


# Global settings instance
_settings: Optional[Settings] = None


def get_settings(source: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Get or create the global settings instance.

    Args:
        source: Mapping to read from on first creation (defaults to os.environ)

    Returns:
        Validated settings

    Raises:
        ConfigurationError: If a setting is invalid
    """
    global _settings
    if _settings is None:
        settings = Settings(source)
        settings.validate()
        _settings = settings
    return _settings


def reset_settings() -> None:
    """Drop the cached global settings."""
    global _settings
    _settings = None
