"""Media processing infrastructure."""

from .ffmpeg import FFmpegTranscoder, build_invocation, split_diagnostics

__all__ = ["FFmpegTranscoder", "build_invocation", "split_diagnostics"]
