"""CLI interface for running the pipeline locally."""
import sys
import json
import argparse
import logging
from pathlib import Path

from ..application.factories import create_dispatcher
from ..domain.events import OBJECT_CREATE_EVENT
from ..domain.exceptions import ConfigurationError
from ..infrastructure.config import ConfigLoader
from ..shared.logging import setup_logger, get_logger, resolve_level


def single_object_event(bucket: str, key: str) -> dict:
    """Wrap one object in an ObjectCreate event batch."""
    return {
        "messages": [
            {
                "event_metadata": {"event_type": OBJECT_CREATE_EVENT},
                "details": {"bucket_id": bucket, "object_id": key},
            }
        ]
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Transcode bucket objects to WebM")
    parser.add_argument('--config', type=Path, help='Config YAML file')
    parser.add_argument('--bucket', '-b', help='Bucket of the source object')
    parser.add_argument('--object', '-k', dest='object_id', help='Key of the source object')
    parser.add_argument('--event', '-e', type=Path, help='JSON file with an event batch')
    parser.add_argument('--ffmpeg', help='Path to ffmpeg binary (override)')
    parser.add_argument('--temp-dir', type=Path, help='Local working directory (override)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Verbose')
    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.event is None and not (args.bucket and args.object_id):
        parser.error("either --event or both --bucket and --object are required")

    logger = get_logger(__name__)

    try:
        config = ConfigLoader(args.config).load(overrides={
            'ffmpeg_path': args.ffmpeg,
            'temp_dir': args.temp_dir,
        })
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 2

    level = logging.DEBUG if args.verbose else resolve_level(config.log_level)
    setup_logger('webm_transcoder', level=level)

    if args.event is not None:
        with open(args.event, 'r') as f:
            event = json.load(f)
    else:
        event = single_object_event(args.bucket, args.object_id)

    batch = create_dispatcher(config).dispatch(event)

    for result in batch.results:
        if result.success:
            logger.info(f"OK {result.location.object_id} -> {result.output_key} ({result.mode.value})")
        else:
            logger.error(f"FAILED {result.location.object_id}: {result.error}")

    return 0 if batch.all_succeeded else 1


if __name__ == '__main__':
    sys.exit(main())
