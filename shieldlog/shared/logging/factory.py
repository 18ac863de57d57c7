"""
Logging factory with structured logging.
"""

import logging
import os

import structlog
from structlog.contextvars import merge_contextvars
from structlog.processors import (
    TimeStamper,
    add_log_level,
    CallsiteParameter,
    CallsiteParameterAdder,
    JSONRenderer,
    KeyValueRenderer,
    UnicodeDecoder,
)
from structlog.stdlib import ProcessorFormatter, add_logger_name

from .sanitizers import RedactionProcessor


def get_logger(name: str):
    """
    Get a structured logger with service context.

    The logger is a lazy proxy: it picks up the active structlog
    configuration on first use rather than at creation time. The
    ``environment`` field is added by ``configure_logging``.

    Args:
        name: Logger name (e.g., "shieldlog.application.logging_middleware")

    Returns:
        Structured logger carrying service and version
    """
    return structlog.get_logger(
        name,
        service="shieldlog",
        version=os.getenv("SERVICE_VERSION", "0.1.0"),
    )


class EnvironmentAdder:
    """Structlog processor stamping the configured environment on every event."""

    def __init__(self, environment: str) -> None:
        self.environment = environment

    def __call__(self, logger, name: str, event_dict):
        event_dict["environment"] = self.environment
        return event_dict


def configure_logging(
    environment: str = "development",
    log_level: str = "INFO",
    json_logs: bool = True,
    include_caller_info: bool = True,
    cache_logger_on_first_use: bool = True,
) -> None:
    """
    Configure structured logging.

    Args:
        environment: Environment name (development, staging, production, test)
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Whether to output JSON formatted logs
        include_caller_info: Include file, function, and line number
        cache_logger_on_first_use: Freeze loggers after their first call
    """

    # Processors shared by structlog and foreign (stdlib) log records
    shared_processors = [
        merge_contextvars,
        TimeStamper(fmt="ISO", utc=True),
        add_log_level,
        add_logger_name,
        EnvironmentAdder(environment),
        UnicodeDecoder(),
        RedactionProcessor(),
    ]

    if include_caller_info and environment == "development":
        shared_processors.append(
            CallsiteParameterAdder(
                parameters=[
                    CallsiteParameter.FILENAME,
                    CallsiteParameter.FUNC_NAME,
                    CallsiteParameter.LINENO,
                ],
                additional_ignores=["structlog", "logging"],
            )
        )

    if json_logs:
        renderer = JSONRenderer(sort_keys=True)
    else:
        renderer = KeyValueRenderer(key_order=["timestamp", "level", "event", "logger"])

    level = _get_log_level_int(log_level)

    structlog.configure(
        processors=shared_processors + [ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=cache_logger_on_first_use,
    )

    # Route standard library records through the same renderer
    handler = logging.StreamHandler()
    handler.setFormatter(
        ProcessorFormatter(
            processors=[ProcessorFormatter.remove_processors_meta, renderer],
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)


def _get_log_level_int(level: str) -> int:
    """Convert string log level to integer."""
    levels = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "WARN": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return levels.get(level.upper(), logging.INFO)
