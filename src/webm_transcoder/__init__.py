"""Event-triggered WebM transcoding for object storage buckets."""

__version__ = "0.1.0"
