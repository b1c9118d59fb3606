"""Cloud function entry point."""

import threading
from typing import Any, Dict, Optional

from ..application.dispatcher import EventDispatcher
from ..application.factories import create_dispatcher
from ..domain.exceptions import BatchProcessingError, ConfigurationError
from ..infrastructure.config import ConfigLoader
from ..shared.logging import get_logger, resolve_level, setup_logger

logger = get_logger(__name__)

_dispatcher: Optional[EventDispatcher] = None
_startup_error: Optional[ConfigurationError] = None
_dispatcher_lock = threading.Lock()


def init_dispatcher() -> EventDispatcher:
    """
    Build the process-wide dispatcher from the environment.

    A configuration failure is remembered: later invocations re-raise it
    without reloading, so a misconfigured process never accepts events.

    Raises:
        ConfigurationError: If required configuration is missing
    """
    global _dispatcher, _startup_error
    with _dispatcher_lock:
        if _startup_error is not None:
            raise _startup_error
        if _dispatcher is None:
            try:
                config = ConfigLoader().load()
            except ConfigurationError as e:
                _startup_error = e
                raise
            setup_logger('webm_transcoder', level=resolve_level(config.log_level))
            _dispatcher = create_dispatcher(config)
        return _dispatcher


def get_dispatcher() -> EventDispatcher:
    """Process-wide dispatcher, built at import or on first call."""
    return init_dispatcher()


def reset_dispatcher() -> None:
    global _dispatcher, _startup_error
    with _dispatcher_lock:
        _dispatcher = None
        _startup_error = None


def handler(event: Any, context: Any = None) -> Dict[str, int]:
    """
    Handle one storage notification batch.

    Every qualifying object is attempted. If any failed, BatchProcessingError
    is raised afterwards so the platform records the invocation as failed.
    """
    batch = get_dispatcher().dispatch(event)
    if not batch.all_succeeded:
        raise BatchProcessingError(batch.failed)
    return {"processed": len(batch.results), "failed": 0}


try:
    init_dispatcher()
except ConfigurationError as e:
    logger.error(f"Startup configuration failed: {e}")
