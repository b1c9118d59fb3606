import os
import stat
import sys
from pathlib import Path

import pytest

# Ensure src/ is on sys.path so the package is importable without installing
SRC = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src'))
if SRC not in sys.path:
    sys.path.insert(0, SRC)


@pytest.fixture
def fake_ffmpeg(tmp_path):
    """
    Factory for stand-in encoder executables.

    The script writes `stderr` to its diagnostic stream, copies the input
    (argument after -i) to the output (last argument) when `copy` is set,
    and exits with `exit_code`.
    """
    def make(exit_code=0, stderr="frame=1 fps=0.0\n", copy=True, body=None):
        script = tmp_path / f"ffmpeg_{exit_code}_{len(list(tmp_path.iterdir()))}"
        lines = ["#!/bin/sh"]
        if body is not None:
            lines.append(body)
        else:
            if stderr:
                lines.append(f"printf '%s' '{stderr}' >&2")
            if copy:
                lines.append('in=""; prev=""; for a in "$@"; do '
                             'if [ "$prev" = "-i" ]; then in="$a"; fi; prev="$a"; out="$a"; done')
                lines.append('cat "$in" > "$out"')
            lines.append(f"exit {exit_code}")
        script.write_text("\n".join(lines) + "\n")
        script.chmod(script.stat().st_mode | stat.S_IEXEC)
        return str(script)

    return make


def object_create_message(bucket, key, event_type="yandex.cloud.events.storage.ObjectCreate"):
    return {
        "event_metadata": {"event_type": event_type, "event_id": "e1"},
        "details": {"bucket_id": bucket, "object_id": key},
    }


@pytest.fixture
def make_event():
    """Build an event batch from (bucket, key[, event_type]) tuples."""
    def make(*items):
        return {"messages": [object_create_message(*item) for item in items]}
    return make
