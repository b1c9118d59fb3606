"""Event batch dispatch."""

from typing import Any

from ..domain.events import OBJECT_CREATE_EVENT, iter_object_locations
from ..domain.models import BatchResult
from ..shared.logging import get_logger
from .pipeline import TranscodePipeline


class EventDispatcher:
    """
    Runs the pipeline once per qualifying message of an event batch.

    Objects are processed one after another. Each is isolated: a failure is
    recorded in the batch result and the next object is still attempted.
    """

    def __init__(self, pipeline: TranscodePipeline, event_type: str = OBJECT_CREATE_EVENT):
        self._pipeline = pipeline
        self.event_type = event_type
        self._logger = get_logger(__name__)

    def dispatch(self, event: Any) -> BatchResult:
        batch = BatchResult()
        for location in iter_object_locations(event, self.event_type):
            batch.add(self._pipeline.process_safely(location))

        if batch.results:
            self._logger.info(
                f"Batch finished: {len(batch.succeeded)} succeeded, {len(batch.failed)} failed"
            )
        else:
            self._logger.info("No qualifying messages in event")
        return batch
