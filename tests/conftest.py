"""Test configuration and shared fixtures."""

import logging
from unittest.mock import Mock

import pytest
import structlog

from shieldlog.application.config import reset_settings
from shieldlog.application.ports import LogEntry, RequestLogger
from shieldlog.application.runtime_state import RuntimeState, reset_runtime_state
from shieldlog.domain.http import InterceptedRequest, InterceptedResponse
from shieldlog.domain.value_objects import LoggingConfig


@pytest.fixture(autouse=True)
def _isolate_globals():
    """Reset process-wide state touched by the interceptors."""
    yield
    reset_runtime_state()
    reset_settings()
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


@pytest.fixture
def state() -> RuntimeState:
    """Fresh runtime state, independent of the process-wide one."""
    return RuntimeState()


@pytest.fixture
def log_entry() -> Mock:
    return Mock(spec=LogEntry)


@pytest.fixture
def request_logger(log_entry) -> Mock:
    """Logger whose entries are recorded for assertions."""
    logger = Mock(spec=RequestLogger)
    logger.from_request.return_value = log_entry
    return logger


@pytest.fixture
def health_excluded_config() -> LoggingConfig:
    return LoggingConfig(log_requests=True, exclude_paths=("/health",))


@pytest.fixture
def api_request() -> InterceptedRequest:
    return InterceptedRequest("/api/users", headers={"X-Request-Id": "req_test"})


@pytest.fixture
def ok_response() -> InterceptedResponse:
    return InterceptedResponse.ok()


@pytest.fixture
def restore_root_logging():
    """Put back root handlers replaced by configure_logging."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
