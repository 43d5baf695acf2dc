# ================================
# file: appio/descriptor.py
# ================================
"""Arena descriptor file I/O.

Format: one text line per arena row, north-most row first, each line a
string of '0'/'1' characters (1 = obstacle).
"""
from __future__ import annotations
import os
import tempfile

from core.config import ARENA_WIDTH, ARENA_LENGTH
from core.errors import DescriptorIOError
from sim.arena import ArenaLayout


def write_descriptor(layout: ArenaLayout, path: str) -> None:
    """Write atomically: temp file in the target directory, then os.replace."""
    directory = os.path.dirname(os.path.abspath(path))
    try:
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=".arena-", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(layout.to_descriptor())
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
    except OSError as e:
        raise DescriptorIOError(f"cannot write arena descriptor {path}: {e}") from e


def read_descriptor(path: str, width: int = ARENA_WIDTH, length: int = ARENA_LENGTH) -> ArenaLayout:
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise DescriptorIOError(f"cannot read arena descriptor {path}: {e}") from e
    return ArenaLayout.from_descriptor(text, width, length)
