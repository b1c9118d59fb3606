"""Wiring of pipeline components from configuration."""

from typing import Optional

from ..domain.protocols import IObjectStore
from ..infrastructure.config.loader import TranscoderConfig
from ..infrastructure.io import StreamTransfer
from ..infrastructure.media import FFmpegTranscoder
from ..infrastructure.storage import MountResolver, get_default_store
from ..shared.logging import LoggerAdapter, get_logger
from .dispatcher import EventDispatcher
from .pipeline import TranscodePipeline


def create_pipeline(
    config: TranscoderConfig,
    store: Optional[IObjectStore] = None
) -> TranscodePipeline:
    """
    Build a pipeline with all dependencies from config.

    Args:
        config: Loaded configuration
        store: Object store to use (process-wide boto3 client if None)

    Returns:
        Ready-to-use TranscodePipeline
    """
    if store is None:
        store = get_default_store(config)

    transfer = StreamTransfer(
        store,
        chunk_size=config.chunk_size,
        progress_interval=config.progress_interval
    )
    transcoder = FFmpegTranscoder(
        binary=config.ffmpeg_path,
        timeout=config.encoder_timeout
    )
    mount_resolver = MountResolver(
        mount_name=config.bucket_mount_name,
        result_prefix=config.result_prefix,
        mount_base=config.mount_base
    )

    return TranscodePipeline(
        transfer=transfer,
        transcoder=transcoder,
        mount_resolver=mount_resolver,
        result_prefix=config.result_prefix,
        temp_dir=config.temp_dir,
        logger=LoggerAdapter(get_logger('webm_transcoder.pipeline'))
    )


def create_dispatcher(
    config: TranscoderConfig,
    store: Optional[IObjectStore] = None
) -> EventDispatcher:
    """Build an event dispatcher around a configured pipeline."""
    return EventDispatcher(create_pipeline(config, store))
