"""Tests for EventDispatcher."""

from unittest.mock import Mock

from webm_transcoder.application.dispatcher import EventDispatcher
from webm_transcoder.domain.exceptions import EncodeFailure
from webm_transcoder.domain.models import ObjectLocation, PipelineResult


def ok(location):
    return PipelineResult(location=location, success=True)


def test_one_call_per_qualifying_message(make_event):
    pipeline = Mock()
    pipeline.process_safely.side_effect = ok

    batch = EventDispatcher(pipeline).dispatch(make_event(("b", "a.mp4"), ("b", "c.mp4")))

    assert [c.args[0] for c in pipeline.process_safely.call_args_list] == [
        ObjectLocation("b", "a.mp4"),
        ObjectLocation("b", "c.mp4"),
    ]
    assert batch.all_succeeded


def test_non_matching_event_type_not_processed(make_event):
    pipeline = Mock()

    batch = EventDispatcher(pipeline).dispatch(
        make_event(("b", "in/sample.mp4", "yandex.cloud.events.storage.ObjectDelete")))

    pipeline.process_safely.assert_not_called()
    assert batch.results == []


def test_failure_does_not_stop_batch(make_event):
    """A failed object is recorded and the next one is still attempted."""
    pipeline = Mock()
    failure = EncodeFailure(1)

    def process(location):
        if location.object_id == "bad.mp4":
            return PipelineResult(location=location, success=False, error=failure)
        return ok(location)

    pipeline.process_safely.side_effect = process

    batch = EventDispatcher(pipeline).dispatch(
        make_event(("b", "bad.mp4"), ("b", "good.mp4")))

    assert pipeline.process_safely.call_count == 2
    assert [r.location.object_id for r in batch.succeeded] == ["good.mp4"]
    assert batch.failed[0].error is failure


def test_empty_event():
    pipeline = Mock()

    assert EventDispatcher(pipeline).dispatch({}).results == []
    pipeline.process_safely.assert_not_called()
