"""Configuration package."""

from .loader import ConfigLoader, TranscoderConfig

__all__ = ["ConfigLoader", "TranscoderConfig"]
