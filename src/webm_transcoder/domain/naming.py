"""Result object naming."""

TARGET_EXTENSION = ".webm"


def source_file_name(object_id: str) -> str:
    """Last path segment of an object key."""
    return object_id.split("/")[-1]


def derive_result_name(object_id: str, extension: str = TARGET_EXTENSION) -> str:
    """
    Derive the result file name from an object key.

    Takes the last path segment, drops everything after its last dot and
    appends the target extension:

        folder/video.final.mp4 -> video.final.webm

    Args:
        object_id: Source object key
        extension: Target extension including the leading dot

    Returns:
        Result file name
    """
    name = source_file_name(object_id)
    stem, dot, _ = name.rpartition(".")
    if not dot:
        stem = name
    return stem + extension


def result_key(prefix: str, result_name: str) -> str:
    """Object key the result is stored under."""
    return f"{prefix}{result_name}"
