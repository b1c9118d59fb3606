"""Tests for the local CLI."""

import json
import pytest
from unittest.mock import patch

from webm_transcoder.domain.exceptions import ConfigurationError
from webm_transcoder.domain.models import BatchResult, ObjectLocation, PipelineResult, TransferMode
from webm_transcoder.presentation import cli


def test_single_object_event_shape():
    event = cli.single_object_event("b", "in/sample.mp4")

    msg = event["messages"][0]
    assert msg["event_metadata"]["event_type"] == "yandex.cloud.events.storage.ObjectCreate"
    assert msg["details"] == {"bucket_id": "b", "object_id": "in/sample.mp4"}


def test_requires_input():
    with pytest.raises(SystemExit) as exc_info:
        cli.main([])

    assert exc_info.value.code == 2


@patch.object(cli, 'ConfigLoader')
def test_configuration_error_exit_code(mock_loader):
    mock_loader.return_value.load.side_effect = ConfigurationError("missing")

    assert cli.main(["--bucket", "b", "--object", "k.mp4"]) == 2


@patch.object(cli, 'create_dispatcher')
@patch.object(cli, 'ConfigLoader')
def test_single_object_run(mock_loader, mock_create):
    mock_loader.return_value.load.return_value.log_level = "INFO"
    batch = BatchResult()
    batch.add(PipelineResult(ObjectLocation("b", "k.mp4"), True,
                             mode=TransferMode.REMOTE, output_key="out/k.webm"))
    mock_create.return_value.dispatch.return_value = batch

    assert cli.main(["-b", "b", "-k", "k.mp4", "--ffmpeg", "/usr/bin/ffmpeg"]) == 0

    event = mock_create.return_value.dispatch.call_args[0][0]
    assert event == cli.single_object_event("b", "k.mp4")
    overrides = mock_loader.return_value.load.call_args[1]["overrides"]
    assert overrides["ffmpeg_path"] == "/usr/bin/ffmpeg"


@patch.object(cli, 'create_dispatcher')
@patch.object(cli, 'ConfigLoader')
def test_event_file_with_failure(mock_loader, mock_create, tmp_path):
    mock_loader.return_value.load.return_value.log_level = "INFO"
    event = cli.single_object_event("b", "bad.mp4")
    event_file = tmp_path / "event.json"
    event_file.write_text(json.dumps(event))
    batch = BatchResult()
    batch.add(PipelineResult(ObjectLocation("b", "bad.mp4"), False, error=RuntimeError("boom")))
    mock_create.return_value.dispatch.return_value = batch

    assert cli.main(["--event", str(event_file)]) == 1
    assert mock_create.return_value.dispatch.call_args[0][0] == event
