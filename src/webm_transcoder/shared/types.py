"""Common type definitions."""

from typing import Callable, Union
from pathlib import Path

# Type alias for paths
PathLike = Union[str, Path]

# Receives one encoder diagnostic line
LogSink = Callable[[str], None]
