"""Request/response logging interceptor.

Hooks read the logger and config from a ``RuntimeState`` (the process-wide
one unless another is injected), so they can be registered as free-standing
callbacks. Logging is best-effort: every hook lets the request through.

Typical startup::

    logging_mw = LoggingMiddleware(LoggingConfig(exclude_paths=("/health",)))
    logging_mw.set_global_logger(StructlogRequestLogger())
    logging_mw.set_global_config()
    logging_mw.register(chain)
"""

import time
from typing import Optional

from shieldlog.application.chain import InterceptorChain
from shieldlog.application.ports import R, RequestLogger, RequestPort
from shieldlog.application.runtime_state import RuntimeState, get_runtime_state
from shieldlog.domain.errors import AnnotationError, LogEntryError
from shieldlog.domain.paths import is_excluded
from shieldlog.domain.value_objects import LoggingConfig, MiddlewareResult
from shieldlog.shared.logging import get_logger

logger = get_logger(__name__)

REQUEST_START_TIME_KEY = "request_start_time"
REQUEST_RECEIVED_MESSAGE = "Request received"


class LoggingMiddleware:
    """Logs incoming requests; passes responses through."""

    def __init__(
        self,
        config: Optional[LoggingConfig] = None,
        state: Optional[RuntimeState] = None,
    ) -> None:
        self.config = config or LoggingConfig()
        self._state = state or get_runtime_state()

    @property
    def state(self) -> RuntimeState:
        return self._state

    def set_global_logger(self, request_logger: RequestLogger) -> None:
        """Publish the logger used by the hooks (call once at startup)."""
        self._state.set_logger(request_logger)

    def set_global_config(self) -> None:
        """Publish this instance's config (call once at startup)."""
        self._state.set_config(self.config)

    def pre_request(self, request: RequestPort) -> MiddlewareResult:
        """
        Log an incoming request.

        Skipped when config or logger are unset, the path is excluded, or
        request logging is off. Otherwise attaches ``request_start_time``
        (milliseconds since epoch, as a string) and emits one entry. A
        failing logger is reported and never stops the request.

        Returns:
            Always ``MiddlewareResult.PROCEED``
        """
        config = self._state.get_config()
        if config is None:
            return MiddlewareResult.PROCEED

        request_logger = self._state.get_logger()
        if request_logger is None:
            return MiddlewareResult.PROCEED

        if is_excluded(request.path, config.exclude_paths):
            return MiddlewareResult.PROCEED

        if not config.log_requests:
            return MiddlewareResult.PROCEED

        start_time = str(int(time.time() * 1000))
        try:
            request.set(REQUEST_START_TIME_KEY, start_time)
        except AnnotationError as e:
            logger.debug("request_start_time_not_attached", path=request.path, reason=e.message)
            return MiddlewareResult.PROCEED

        try:
            entry = request_logger.from_request(
                request, config.request_log_level, REQUEST_RECEIVED_MESSAGE
            )
        except LogEntryError as e:
            logger.debug("request_log_entry_failed", path=request.path, reason=e.message)
            return MiddlewareResult.PROCEED
        except Exception as error:
            logger.warning(
                "request_logger_failed",
                path=request.path,
                error=error.__class__.__name__,
                exc_info=True,
            )
            return MiddlewareResult.PROCEED

        try:
            entry.log()
        except Exception as error:
            logger.warning(
                "request_log_emit_failed",
                path=request.path,
                error=error.__class__.__name__,
                exc_info=True,
            )
        return MiddlewareResult.PROCEED

    def on_response(self, response: R, request: Optional[RequestPort] = None) -> R:
        """
        Response hook.

        The response is returned unchanged in every case. No entry is
        emitted yet, even with ``log_responses`` on.
        """
        config = self._state.get_config()
        if config is None or not config.log_responses:
            return response

        # TODO: emit a response entry (status, latency from request_start_time)
        return response

    def register(self, chain: InterceptorChain) -> InterceptorChain:
        """Add both hooks to a chain."""
        return chain.use_pre_request(self.pre_request).use_response(self.on_response)
