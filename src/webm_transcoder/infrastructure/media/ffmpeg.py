"""FFmpeg wrapper for WebM transcoding."""

import subprocess
import threading
from pathlib import Path
from typing import Iterator, Optional

from ...domain.exceptions import EncodeFailure, LaunchError
from ...domain.models import EncoderInvocation
from ...shared.logging import get_logger
from ...shared.types import LogSink

logger = get_logger(__name__)

# Fit into 1280x720, keep aspect ratio, even dimensions
SCALE_FILTER = "scale='if(gt(iw/ih,16/9),1280,-2)':'if(gt(iw/ih,16/9),-2,720)'"

STDERR_CHUNK_SIZE = 4096


def build_invocation(input_path: Path, output_path: Path) -> EncoderInvocation:
    """
    Build the fixed VP9 argument list for one run.

    Realtime deadline with cpu-used 8 trades compression efficiency for speed.
    """
    args = (
        '-hide_banner',
        '-v', 'warning',
        '-stats',
        '-y',
        '-i', str(input_path),
        '-vf', SCALE_FILTER,
        '-c:v', 'libvpx-vp9',
        '-deadline', 'realtime',
        '-cpu-used', '8',
        '-crf', '25',
        str(output_path),
    )
    return EncoderInvocation(input_path=Path(input_path), output_path=Path(output_path), args=args)


def split_diagnostics(chunk: bytes) -> Iterator[str]:
    """
    Turn one raw stderr chunk into log lines.

    A newline is appended to chunks that lack one so consecutive chunks never
    merge. Carriage returns from -stats progress also end a line.
    """
    text = chunk.decode('utf-8', errors='replace')
    if not text.endswith('\n'):
        text += '\n'
    for line in text.splitlines():
        if line.strip():
            yield line


class FFmpegTranscoder:
    """
    Runs ffmpeg as a child process and relays its diagnostics.
    Implements ITranscoder protocol.
    """

    def __init__(
        self,
        binary: str = "./ffmpeg",
        log_sink: Optional[LogSink] = None,
        timeout: Optional[float] = None
    ):
        """
        Initialize transcoder.

        Args:
            binary: Path to the ffmpeg executable
            log_sink: Receives each diagnostic line (module logger if None)
            timeout: Seconds before the process is killed; None waits forever
        """
        self.binary = binary
        self.timeout = timeout
        self._sink = log_sink or logger.info
        self._logger = get_logger(__name__)

    def run(self, input_path: Path, output_path: Path) -> EncoderInvocation:
        """
        Transcode input to output.

        Diagnostics are relayed as they arrive. Exit code 0 is success
        whatever the diagnostics said.

        Args:
            input_path: Local source video
            output_path: Local WebM destination

        Returns:
            The invocation that ran

        Raises:
            LaunchError: If ffmpeg cannot be started
            EncodeFailure: If ffmpeg exits non-zero or hits the deadline
        """
        invocation = build_invocation(input_path, output_path)
        self._logger.info(f"Running ffmpeg: {input_path} -> {output_path}")

        try:
            proc = subprocess.Popen(
                invocation.command(self.binary),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                bufsize=0
            )
        except OSError as e:
            raise LaunchError(f"Failed to start {self.binary}: {e}") from e

        timed_out = threading.Event()
        timer = None
        if self.timeout is not None:
            def kill():
                timed_out.set()
                proc.kill()

            timer = threading.Timer(self.timeout, kill)
            timer.daemon = True
            timer.start()

        try:
            with proc.stderr:
                for chunk in iter(lambda: proc.stderr.read(STDERR_CHUNK_SIZE), b''):
                    for line in split_diagnostics(chunk):
                        self._sink(line)
            returncode = proc.wait()
        finally:
            if timer is not None:
                timer.cancel()

        if timed_out.is_set() and returncode != 0:
            raise EncodeFailure(returncode, timed_out=True)
        if returncode != 0:
            raise EncodeFailure(returncode)

        return invocation
