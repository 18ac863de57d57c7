"""Starlette host adapter for an ``InterceptorChain``.

This module runs the two-phase hook protocol around a Starlette/FastAPI
application: pre-request hooks before the app, response hooks after it.
A pre-request ABORT answers 401 Unauthorized with an empty body.
"""

from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from shieldlog.application.chain import InterceptorChain
from shieldlog.domain.errors import AnnotationError
from shieldlog.domain.value_objects import MiddlewareResult
from shieldlog.shared.logging import bind_request_context, clear_request_context, get_logger

logger = get_logger(__name__)


class StarletteRequest:
    """Request handle backed by a Starlette request; attached values live on ``request.state``."""

    def __init__(self, request: Request):
        self.raw = request

    @property
    def path(self) -> str:
        return self.raw.url.path

    @property
    def method(self) -> str:
        return self.raw.method

    @property
    def headers(self):
        return self.raw.headers

    @property
    def query(self) -> str:
        return self.raw.url.query

    def set(self, key: str, value: Any) -> None:
        if not key:
            raise AnnotationError(key, "empty key")
        setattr(self.raw.state, key, value)

    def get(self, key: str, default: Any = None) -> Any:
        return getattr(self.raw.state, key, default)


class StarletteResponse:
    """Response handle; Starlette headers are mutable, so ``with_header`` updates in place."""

    def __init__(self, response: Response):
        self.raw = response

    def with_header(self, name: str, value: str) -> "StarletteResponse":
        self.raw.headers[name] = value
        return self

    def header(self, name: str):
        return self.raw.headers.get(name)


class InterceptorMiddleware(BaseHTTPMiddleware):
    """Runs an interceptor chain around every request."""

    def __init__(self, app, chain: InterceptorChain):
        """
        Initialize interceptor middleware.

        Args:
            app: ASGI application
            chain: Hooks to run before and after the application
        """
        super().__init__(app)
        self.chain = chain

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        bind_request_context(request.headers.get("x-request-id"))
        try:
            wrapped_request = StarletteRequest(request)

            if self.chain.execute_pre_request(wrapped_request) is MiddlewareResult.ABORT:
                # Aborted requests skip the handler and the response hooks
                logger.info("request_aborted", path=wrapped_request.path)
                return Response(status_code=401)

            response = await call_next(request)
            wrapped = self.chain.execute_response(StarletteResponse(response), wrapped_request)
            return wrapped.raw
        finally:
            clear_request_context()
