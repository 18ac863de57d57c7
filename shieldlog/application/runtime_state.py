"""Process-wide logger and logging config shared by the interceptors.

Both slots are written once during application startup and read on every
request. Each slot has its own lock; readers hold it only long enough to
fetch the reference, never while formatting or emitting a log entry.
Replacing a slot after traffic has started is not supported.
"""

import threading
from typing import Optional

from shieldlog.application.ports import RequestLogger
from shieldlog.domain.value_objects import LoggingConfig


class RuntimeState:
    """Two independently guarded optional slots: logger and logging config."""

    def __init__(
        self,
        logger: Optional[RequestLogger] = None,
        config: Optional[LoggingConfig] = None,
    ) -> None:
        self._logger = logger
        self._logger_lock = threading.Lock()
        self._config = config
        self._config_lock = threading.Lock()

    def set_logger(self, logger: Optional[RequestLogger]) -> None:
        with self._logger_lock:
            self._logger = logger

    def set_config(self, config: Optional[LoggingConfig]) -> None:
        """Replace the logging config (full overwrite, never a merge)."""
        with self._config_lock:
            self._config = config

    def get_logger(self) -> Optional[RequestLogger]:
        with self._logger_lock:
            return self._logger

    def get_config(self) -> Optional[LoggingConfig]:
        with self._config_lock:
            return self._config

    def reset(self) -> None:
        """Clear both slots."""
        self.set_logger(None)
        self.set_config(None)


# Global runtime state instance
_runtime_state = RuntimeState()


def get_runtime_state() -> RuntimeState:
    """Return the process-wide runtime state."""
    return _runtime_state


def set_logger(logger: Optional[RequestLogger]) -> None:
    _runtime_state.set_logger(logger)


def set_config(config: Optional[LoggingConfig]) -> None:
    _runtime_state.set_config(config)


def get_logger() -> Optional[RequestLogger]:
    return _runtime_state.get_logger()


def get_config() -> Optional[LoggingConfig]:
    return _runtime_state.get_config()


def reset_runtime_state() -> None:
    _runtime_state.reset()
