"""Per-object transcoding orchestrator."""

from pathlib import Path
from typing import Callable, Optional

from ..domain.models import (
    ObjectLocation,
    PipelineResult,
    TransferMode,
    TransferPlan,
)
from ..domain.naming import derive_result_name, result_key, source_file_name
from ..domain.protocols import (
    ILogger,
    IMetricsCollector,
    IMountResolver,
    IStreamTransfer,
    ITranscoder,
)
from ..shared.logging import LoggerAdapter, get_logger
from ..shared.metrics import MetricsCollector
from ..shared.types import PathLike


class TranscodePipeline:
    """
    Coordinates download, encode and upload for one object at a time.

    Steps run strictly in order and each one depends on the previous
    succeeding. A failure stops the remaining steps; files already written
    are left in place.
    """

    def __init__(
        self,
        transfer: IStreamTransfer,
        transcoder: ITranscoder,
        mount_resolver: IMountResolver,
        result_prefix: str,
        temp_dir: PathLike = "/tmp",
        logger: Optional[ILogger] = None,
        metrics_factory: Callable[[], IMetricsCollector] = MetricsCollector
    ):
        self._transfer = transfer
        self._transcoder = transcoder
        self._mount_resolver = mount_resolver
        self.result_prefix = result_prefix
        self.temp_dir = Path(temp_dir)
        self._logger = logger or LoggerAdapter(get_logger(__name__))
        self._metrics_factory = metrics_factory

    def plan(self, location: ObjectLocation) -> TransferPlan:
        """Choose mounted or remote I/O for an object."""
        result_name = derive_result_name(location.object_id)
        mounted = self._mount_resolver.resolve(location.object_id, result_name)
        if mounted is not None:
            return mounted

        return TransferPlan(
            mode=TransferMode.REMOTE,
            input_path=self.temp_dir / source_file_name(location.object_id),
            output_path=self.temp_dir / result_name,
        )

    def process(self, location: ObjectLocation) -> PipelineResult:
        """
        Transcode one object.

        Args:
            location: Source object

        Returns:
            Successful PipelineResult

        Raises:
            DomainException: Whatever step failed (FetchError, TransferError,
                LaunchError, EncodeFailure, UploadError)
        """
        metrics = self._metrics_factory()
        metrics.start_timer('total')

        result_name = derive_result_name(location.object_id)
        output_key = result_key(self.result_prefix, result_name)
        plan = self.plan(location)

        if plan.is_mounted:
            self._logger.info("Using bucket mount.")
        else:
            metrics.start_timer('download')
            self._transfer.copy_from_remote(location, plan.input_path)
            metrics.stop_timer('download')

        metrics.start_timer('encode')
        self._transcoder.run(plan.input_path, plan.output_path)
        metrics.stop_timer('encode')

        if not plan.is_mounted:
            metrics.start_timer('upload')
            self._transfer.copy_to_remote(
                plan.output_path,
                ObjectLocation(bucket_id=location.bucket_id, object_id=output_key)
            )
            metrics.stop_timer('upload')

        total = metrics.stop_timer('total')
        self._logger.info(f"{location.object_id} is done.")
        self._logger.info(f"Timings for {location.object_id}: {metrics.format_summary()}")

        return PipelineResult(
            location=location,
            success=True,
            mode=plan.mode,
            output_key=output_key,
            output_path=plan.output_path,
            duration_seconds=total,
        )

    def process_safely(self, location: ObjectLocation) -> PipelineResult:
        """Run process() and capture any failure in the result instead of raising."""
        try:
            return self.process(location)
        except Exception as e:
            self._logger.exception(f"Processing {location.object_id} failed: {e}")
            return PipelineResult(location=location, success=False, error=e)

