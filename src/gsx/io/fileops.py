"""File operations: atomic write and BOM-tolerant text reads."""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path


def atomic_write(target: str | Path, data: bytes) -> None:
    """Write data to target atomically via temp file + rename."""
    target = Path(target)
    fd, tmp_path = tempfile.mkstemp(
        dir=target.parent, suffix=target.suffix, prefix=".gsx_tmp_"
    )
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        shutil.move(tmp_path, target)
    except Exception:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def read_text_safe(path: str | Path) -> str:
    """Read a text file with UTF-8 BOM tolerance.

    Uses ``utf-8-sig`` encoding which silently strips a leading BOM when
    present, while reading plain UTF-8 correctly.
    """
    return Path(path).read_text(encoding="utf-8-sig")
