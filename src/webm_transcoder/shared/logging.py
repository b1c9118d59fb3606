"""Centralized logging utilities."""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = '[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s'


def resolve_level(level: Optional[str] = None) -> int:
    """
    Map a level name (or LOG_LEVEL) to a logging level.

    Unknown names fall back to INFO.
    """
    name = (level or os.getenv('LOG_LEVEL') or 'INFO').upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.INFO


def setup_logger(
    name: str,
    level: Optional[int] = None,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    Set up a logger with console and optional file output.

    Args:
        name: Logger name
        level: Logging level (defaults to LOG_LEVEL or INFO)
        log_file: Optional file to write logs to
        format_string: Custom format string

    Returns:
        Configured logger instance
    """
    if level is None:
        level = resolve_level()

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    # Remove existing handlers
    logger.handlers.clear()

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT, datefmt='%H:%M:%S')

    # Function runtimes collect stdout
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the package root logger.

    The root 'webm_transcoder' logger is configured on first use; child
    loggers propagate to it.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    root = logging.getLogger('webm_transcoder')
    if not root.handlers:
        setup_logger('webm_transcoder')
    if name == 'webm_transcoder' or name.startswith('webm_transcoder.'):
        return logging.getLogger(name)
    return root.getChild(name)


class LoggerAdapter:
    """Adapter to make standard logger compatible with ILogger protocol."""

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    def debug(self, message: str, **kwargs) -> None:
        self._logger.debug(message, extra=kwargs)

    def info(self, message: str, **kwargs) -> None:
        self._logger.info(message, extra=kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self._logger.warning(message, extra=kwargs)

    def error(self, message: str, **kwargs) -> None:
        self._logger.error(message, extra=kwargs)

    def exception(self, message: str, **kwargs) -> None:
        """Log exception with traceback."""
        self._logger.exception(message, extra=kwargs)
