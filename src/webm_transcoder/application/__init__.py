"""Application layer."""

from .pipeline import TranscodePipeline
from .dispatcher import EventDispatcher
from .factories import create_pipeline, create_dispatcher

__all__ = ["TranscodePipeline", "EventDispatcher", "create_pipeline", "create_dispatcher"]
