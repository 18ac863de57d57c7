"""Structured request logger."""

from .request_logger import StructlogLogEntry, StructlogRequestLogger

__all__ = [
    "StructlogLogEntry",
    "StructlogRequestLogger",
]
