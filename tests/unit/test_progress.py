"""Tests for the periodic progress reporter."""

import threading
import time

from webm_transcoder.domain.models import ProgressState
from webm_transcoder.infrastructure.io.progress import ProgressReporter


def test_reports_periodically_and_stops():
    lines = []
    state = ProgressState(100)
    reporter = ProgressReporter(state, interval=0.02, sink=lines.append)

    with reporter:
        state.advance(40)
        time.sleep(0.15)
        assert reporter.running

    assert not reporter.running
    assert lines
    assert lines[-1] == "40 / 100 (40.00%)"

    count = len(lines)
    time.sleep(0.1)
    assert len(lines) == count


def test_thread_stopped_when_body_raises():
    reporter = ProgressReporter(ProgressState(), interval=0.01, sink=lambda line: None)

    try:
        with reporter:
            raise RuntimeError("copy failed")
    except RuntimeError:
        pass

    assert not reporter.running
    assert not any(t.name == "transfer-progress" and t.is_alive() for t in threading.enumerate())


def test_report_with_unknown_total():
    lines = []
    state = ProgressState(None)
    state.advance(3)

    ProgressReporter(state, sink=lines.append).report()

    assert lines == ["3 / 1 (300.00%)"]
