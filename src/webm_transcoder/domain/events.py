"""Storage notification event parsing."""

from typing import Any, Iterator, Mapping

from .models import ObjectLocation
from ..shared.logging import get_logger

logger = get_logger(__name__)

OBJECT_CREATE_EVENT = "yandex.cloud.events.storage.ObjectCreate"


def iter_object_locations(
    event: Any,
    event_type: str = OBJECT_CREATE_EVENT
) -> Iterator[ObjectLocation]:
    """
    Yield object locations for qualifying messages of an event batch.

    A message qualifies when its event_metadata.event_type equals event_type
    and its details carry a non-empty bucket_id and object_id. Everything
    else is skipped.

    Args:
        event: Raw event payload
        event_type: Event type tag to accept

    Yields:
        ObjectLocation per qualifying message, in batch order
    """
    if not isinstance(event, Mapping):
        logger.debug("Event is not a mapping, skipping")
        return

    messages = event.get("messages")
    if not isinstance(messages, list):
        logger.debug("Event has no message list, skipping")
        return

    for index, message in enumerate(messages):
        if not isinstance(message, Mapping):
            continue

        metadata = message.get("event_metadata")
        details = message.get("details")
        if not isinstance(metadata, Mapping) or not isinstance(details, Mapping):
            logger.debug(f"Message {index} is malformed, skipping")
            continue

        if metadata.get("event_type") != event_type:
            logger.debug(f"Message {index} has event type {metadata.get('event_type')!r}, skipping")
            continue

        bucket_id = details.get("bucket_id")
        object_id = details.get("object_id")
        if not bucket_id or not object_id:
            logger.debug(f"Message {index} lacks bucket_id or object_id, skipping")
            continue

        yield ObjectLocation(bucket_id=bucket_id, object_id=object_id)
