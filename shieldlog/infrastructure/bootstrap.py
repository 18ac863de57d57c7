"""
Startup wiring.
This is the composition root where settings, logger and hooks are put together.
"""

from typing import Optional

from shieldlog.application.chain import InterceptorChain
from shieldlog.application.config import Settings, get_settings
from shieldlog.application.logging_middleware import LoggingMiddleware
from shieldlog.application.ports import RequestLogger
from shieldlog.application.runtime_state import RuntimeState
from shieldlog.application.security_headers import SecurityHeadersMiddleware
from shieldlog.infrastructure.logging import StructlogRequestLogger
from shieldlog.infrastructure.middleware import InterceptorMiddleware
from shieldlog.shared.logging import configure_logging, get_logger


def build_chain(
    settings: Settings,
    request_logger: Optional[RequestLogger] = None,
    state: Optional[RuntimeState] = None,
) -> InterceptorChain:
    """
    Publish logger and logging config, and register both interceptors.

    Args:
        settings: Loaded settings
        request_logger: Logger for request entries (structlog-backed by default)
        state: Runtime state to publish into (process-wide by default)

    Returns:
        Chain with the logging and security headers hooks
    """
    logging_mw = LoggingMiddleware(settings.logging_config(), state=state)
    logging_mw.set_global_logger(request_logger or StructlogRequestLogger())
    logging_mw.set_global_config()

    chain = InterceptorChain()
    logging_mw.register(chain)
    SecurityHeadersMiddleware(settings.security_headers_config()).register(chain)
    return chain


def install(
    app,
    settings: Optional[Settings] = None,
    request_logger: Optional[RequestLogger] = None,
    state: Optional[RuntimeState] = None,
) -> InterceptorChain:
    """
    Configure logging and add the interceptors to a Starlette/FastAPI app.

    Must run once, before the app starts serving.
    """
    settings = settings or get_settings()
    configure_logging(
        environment=settings.ENVIRONMENT.value,
        log_level=settings.LOG_LEVEL,
        json_logs=settings.json_logs,
    )

    chain = build_chain(settings, request_logger=request_logger, state=state)
    app.add_middleware(InterceptorMiddleware, chain=chain)

    get_logger(__name__).info(
        "interceptors_installed",
        pre_request_hooks=chain.pre_request_count,
        response_hooks=chain.response_count,
    )
    return chain
