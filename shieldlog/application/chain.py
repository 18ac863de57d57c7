"""Ordered pre-request and response hooks for a host middleware pipeline.

Pre-request hooks receive the request and return a ``MiddlewareResult``;
the first ``ABORT`` stops the phase. Response hooks receive the response
and the originating request and return the (possibly updated) response;
they run in registration order, each seeing the previous hook's result.
"""

from typing import Any, Callable, List, Optional

from shieldlog.domain.errors import ChainFullError
from shieldlog.domain.value_objects import MiddlewareResult
from shieldlog.shared.logging import get_logger

logger = get_logger(__name__)

PreRequestHook = Callable[[Any], MiddlewareResult]
ResponseHook = Callable[[Any, Optional[Any]], Any]


class InterceptorChain:
    """Holds the hooks the host framework runs around each handler call."""

    MAX_HOOKS = 16

    def __init__(self) -> None:
        self._pre_request: List[PreRequestHook] = []
        self._response: List[ResponseHook] = []

    def use_pre_request(self, hook: PreRequestHook) -> "InterceptorChain":
        """
        Register a pre-request hook.

        Raises:
            ChainFullError: If the phase already holds MAX_HOOKS hooks
        """
        if len(self._pre_request) >= self.MAX_HOOKS:
            raise ChainFullError("pre-request", self.MAX_HOOKS)
        self._pre_request.append(hook)
        logger.debug("pre_request_hook_registered", hook=_hook_name(hook))
        return self

    def use_response(self, hook: ResponseHook) -> "InterceptorChain":
        """
        Register a response hook.

        Raises:
            ChainFullError: If the phase already holds MAX_HOOKS hooks
        """
        if len(self._response) >= self.MAX_HOOKS:
            raise ChainFullError("response", self.MAX_HOOKS)
        self._response.append(hook)
        logger.debug("response_hook_registered", hook=_hook_name(hook))
        return self

    def execute_pre_request(self, request: Any) -> MiddlewareResult:
        for hook in self._pre_request:
            if hook(request) is MiddlewareResult.ABORT:
                logger.debug("pre_request_aborted", hook=_hook_name(hook))
                return MiddlewareResult.ABORT
        return MiddlewareResult.PROCEED

    def execute_response(self, response: Any, request: Optional[Any] = None) -> Any:
        for hook in self._response:
            response = hook(response, request)
        return response

    @property
    def pre_request_count(self) -> int:
        return len(self._pre_request)

    @property
    def response_count(self) -> int:
        return len(self._response)


def _hook_name(hook: Callable) -> str:
    return getattr(hook, "__qualname__", type(hook).__name__)
