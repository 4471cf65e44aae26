from __future__ import annotations

import os
import tempfile
from pathlib import Path

from ..errors import StoreIOError


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """Write bytes atomically so an interrupted edit never truncates an entry.

    Raises:
        StoreIOError: if the parent cannot be created or the write fails.
    """
    try:
        ensure_dir(path.parent)
        fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    except OSError as e:
        raise StoreIOError(f"Cannot write entry {path}: {e}") from e

    tmp_path = Path(tmp)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(path)
    except OSError as e:
        try:
            tmp_path.unlink()
        except OSError:
            # The write error is the one worth reporting.
            pass
        raise StoreIOError(f"Cannot write entry {path}: {e}") from e
