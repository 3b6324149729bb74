"""Crash-safe replacement of small text files (config, story cache, log exports)."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


def atomic_write(path: str | Path, content: str, *, encoding: str = "utf-8") -> Path:
    """Replace ``path`` with ``content``; readers see the old file or the new one.

    The text is flushed to a hidden sibling temp file, fsynced, then renamed over
    the target. Missing parent directories are created. Returns the target.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    handle = tempfile.NamedTemporaryFile(
        "w",
        encoding=encoding,
        dir=target.parent,
        prefix=f".{target.name}.",
        suffix=".tmp",
        delete=False,
    )
    staged = Path(handle.name)
    try:
        with handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(staged, target)
    except BaseException:
        staged.unlink(missing_ok=True)
        raise
    return target
