"""Security headers interceptor.

Adds protective response headers according to a per-instance
``SecurityHeadersConfig``. The config is immutable, so one instance can
serve concurrent requests without locking.
"""

from typing import Dict, Optional

from shieldlog.application.chain import InterceptorChain
from shieldlog.application.ports import R, RequestPort
from shieldlog.domain.errors import HeaderFormatError
from shieldlog.domain.value_objects import SecurityHeadersConfig
from shieldlog.shared.logging import get_logger

logger = get_logger(__name__)

HSTS_HEADER = "Strict-Transport-Security"


class SecurityHeadersMiddleware:
    """Response hook adding security headers to all responses."""

    def __init__(self, config: Optional[SecurityHeadersConfig] = None) -> None:
        self.config = config or SecurityHeadersConfig()

    def add_security_headers(self, response: R) -> R:
        """
        Add the enabled security headers to a response.

        Each toggle writes a distinct header, so applying this twice yields
        the same header set. If the HSTS value cannot be formatted the
        response is returned as accumulated so far, without HSTS or any
        header after it.

        Args:
            response: Response exposing ``with_header``

        Returns:
            The response with headers applied
        """
        config = self.config
        result = response

        if config.enable_content_type_options:
            result = result.with_header("X-Content-Type-Options", "nosniff")

        if config.enable_frame_options:
            result = result.with_header("X-Frame-Options", "DENY")

        if config.enable_xss_protection:
            result = result.with_header("X-XSS-Protection", "1; mode=block")

        if config.enable_hsts:
            try:
                result = result.with_header(HSTS_HEADER, format_hsts(config.hsts_max_age))
            except HeaderFormatError as e:
                logger.debug("hsts_header_skipped", reason=e.reason)
                return result

        if config.enable_referrer_policy:
            result = result.with_header("Referrer-Policy", config.referrer_policy)

        if config.enable_csp:
            result = result.with_header("Content-Security-Policy", config.csp_policy)

        if config.enable_permissions_policy and config.permissions_policy:
            result = result.with_header("Permissions-Policy", config.permissions_policy)

        return result

    def on_response(self, response: R, request: Optional[RequestPort] = None) -> R:
        """Response hook form of ``add_security_headers``."""
        return self.add_security_headers(response)

    def register(self, chain: InterceptorChain) -> InterceptorChain:
        return chain.use_response(self.on_response)

    def headers(self) -> Dict[str, str]:
        """Return the headers this instance adds, by name."""
        return dict(self.add_security_headers(_HeaderCollector()).collected)


def format_hsts(max_age: int) -> str:
    """
    Format a Strict-Transport-Security value.

    Raises:
        HeaderFormatError: If max_age is not a non-negative integer
    """
    if isinstance(max_age, bool) or not isinstance(max_age, int):
        raise HeaderFormatError(HSTS_HEADER, f"max-age must be an integer, got {type(max_age).__name__}")
    if max_age < 0:
        raise HeaderFormatError(HSTS_HEADER, "max-age must not be negative")
    return f"max-age={max_age}"


class _HeaderCollector:
    """Stand-in response that records headers."""

    def __init__(self) -> None:
        self.collected: Dict[str, str] = {}

    def with_header(self, name: str, value: str) -> "_HeaderCollector":
        self.collected[name] = value
        return self
