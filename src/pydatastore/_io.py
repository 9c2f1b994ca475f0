"""Whole-file persistence helpers."""

from __future__ import annotations

import os
from pathlib import Path


def read_text(path: Path) -> str | None:
    """Return the file's text, or ``None`` when the file does not exist."""
    if not path.exists():
        return None
    return path.read_text(encoding="utf-8")


def atomic_write_text(path: Path, text: str) -> None:
    """Replace the content of *path* with *text*.

    The text is written to a sibling temporary file which is then moved over
    the target, so readers never observe a half-written file. ``OSError``
    propagates to the caller unchanged.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        tmp_path.write_text(text, encoding="utf-8")
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
