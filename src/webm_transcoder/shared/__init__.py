"""Shared utilities package."""

from .logging import setup_logger, get_logger, LoggerAdapter, resolve_level
from .metrics import MetricsCollector
from .types import PathLike, LogSink

__all__ = [
    "setup_logger",
    "get_logger",
    "LoggerAdapter",
    "resolve_level",
    "MetricsCollector",
    "PathLike",
    "LogSink",
]
