"""Tests for TranscodePipeline orchestration."""

import pytest
from pathlib import Path
from unittest.mock import Mock, call

from webm_transcoder.application.pipeline import TranscodePipeline
from webm_transcoder.domain.exceptions import EncodeFailure, FetchError, LaunchError, UploadError
from webm_transcoder.domain.models import ObjectLocation, TransferMode, TransferPlan


@pytest.fixture
def parts():
    """Mocked collaborators sharing one call recorder."""
    recorder = Mock()
    recorder.resolver.resolve.return_value = None
    return recorder


def make_pipeline(parts, prefix="converted/", temp_dir="/tmp/work"):
    return TranscodePipeline(
        transfer=parts.transfer,
        transcoder=parts.transcoder,
        mount_resolver=parts.resolver,
        result_prefix=prefix,
        temp_dir=temp_dir,
        logger=parts.logger,
    )


LOCATION = ObjectLocation(bucket_id="b", object_id="in/sample.mp4")


class TestRemoteMode:
    """Mount unavailable: download, encode, upload."""

    def test_steps_in_order(self, parts):
        result = make_pipeline(parts).process(LOCATION)

        work = Path("/tmp/work")
        steps = [c for c in parts.mock_calls if c[0].startswith(("transfer.", "transcoder."))]
        assert steps == [
            call.transfer.copy_from_remote(LOCATION, work / "sample.mp4"),
            call.transcoder.run(work / "sample.mp4", work / "sample.webm"),
            call.transfer.copy_to_remote(
                work / "sample.webm", ObjectLocation("b", "converted/sample.webm")),
        ]
        assert result.success is True
        assert result.mode is TransferMode.REMOTE
        assert result.output_key == "converted/sample.webm"

    def test_resolver_receives_derived_name(self, parts):
        make_pipeline(parts).process(LOCATION)

        parts.resolver.resolve.assert_called_once_with("in/sample.mp4", "sample.webm")

    def test_completion_logged(self, parts):
        make_pipeline(parts).process(LOCATION)

        parts.logger.info.assert_any_call("in/sample.mp4 is done.")

    def test_timings_logged_at_info(self, parts):
        make_pipeline(parts).process(LOCATION)

        messages = [c.args[0] for c in parts.logger.info.call_args_list]
        timings = [m for m in messages if m.startswith("Timings for in/sample.mp4:")]
        assert len(timings) == 1
        for stage in ("download", "encode", "upload"):
            assert stage in timings[0]

    def test_encode_failure_skips_upload(self, parts):
        parts.transcoder.run.side_effect = EncodeFailure(1)

        with pytest.raises(EncodeFailure) as exc_info:
            make_pipeline(parts).process(LOCATION)

        assert exc_info.value.exit_code == 1
        parts.transfer.copy_to_remote.assert_not_called()

    def test_fetch_failure_skips_encode(self, parts):
        parts.transfer.copy_from_remote.side_effect = FetchError("gone")

        with pytest.raises(FetchError):
            make_pipeline(parts).process(LOCATION)

        parts.transcoder.run.assert_not_called()
        parts.transfer.copy_to_remote.assert_not_called()

    def test_upload_failure_propagates(self, parts):
        parts.transfer.copy_to_remote.side_effect = UploadError("denied")

        with pytest.raises(UploadError):
            make_pipeline(parts).process(LOCATION)


class TestMountedMode:
    """Mount available: encoder runs on mounted paths, no transfers."""

    def test_no_transfers(self, parts):
        plan = TransferPlan(
            TransferMode.MOUNTED,
            Path("/function/storage/videos/in/sample.mp4"),
            Path("/function/storage/videos/converted/sample.webm"),
        )
        parts.resolver.resolve.return_value = plan

        result = make_pipeline(parts).process(LOCATION)

        parts.transfer.copy_from_remote.assert_not_called()
        parts.transfer.copy_to_remote.assert_not_called()
        parts.transcoder.run.assert_called_once_with(plan.input_path, plan.output_path)
        parts.logger.info.assert_any_call("Using bucket mount.")
        assert result.mode is TransferMode.MOUNTED
        assert result.output_key == "converted/sample.webm"


class TestProcessSafely:
    """Failure capture."""

    def test_failure_captured(self, parts):
        error = LaunchError("no ffmpeg")
        parts.transcoder.run.side_effect = error

        result = make_pipeline(parts).process_safely(LOCATION)

        assert result.success is False
        assert result.error is error
        parts.logger.exception.assert_called_once()

    def test_success_passthrough(self, parts):
        assert make_pipeline(parts).process_safely(LOCATION).success is True


def test_plan_remote_paths(parts):
    plan = make_pipeline(parts, temp_dir="/scratch").plan(ObjectLocation("b", "a/b/clip.v2.mov"))

    assert plan.mode is TransferMode.REMOTE
    assert plan.input_path == Path("/scratch/clip.v2.mov")
    assert plan.output_path == Path("/scratch/clip.v2.webm")
