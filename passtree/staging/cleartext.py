from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path
from typing import IO, Optional

from ..errors import BadPermissionsError, NotFoundError, StoreIOError
from ..models import GPG_EXTENSION


REQUIRED_DIRECTORY_MODE = 0o700
CLEARTEXT_PREFIX = "passtree-cleartext-"
RUNTIME_DIR_ENV = "XDG_RUNTIME_DIR"


def default_staging_root() -> Path:
    runtime_dir = os.environ.get(RUNTIME_DIR_ENV) or ""
    if not runtime_dir:
        raise NotFoundError(f"{RUNTIME_DIR_ENV} is not set")
    return Path(runtime_dir)


def _encrypted_sibling(staging_path: Path) -> Path:
    return staging_path.with_name(staging_path.name + GPG_EXTENSION)


class StagingEntry:
    """A cleartext temp file that is removed when the entry is closed.

    Use as a context manager; leaving the ``with`` block by any route
    deletes the backing file.
    """

    def __init__(self, fd: int, path: Path):
        self._path = path
        self._file: Optional[IO[bytes]] = os.fdopen(fd, "r+b")
        self._closed = False

    @property
    def path(self) -> Path:
        return self._path

    def write(self, data: bytes) -> None:
        if self._closed:
            raise ValueError("staging entry is closed")
        f = self._file
        f.seek(0)
        f.truncate()
        f.write(data)
        f.flush()
        os.fsync(f.fileno())

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            if self._file is not None:
                self._file.close()
                self._file = None
        finally:
            try:
                self._path.unlink()
            except FileNotFoundError:
                pass
            except OSError as e:
                raise StoreIOError(f"Failed to remove cleartext file {self._path}: {e}") from e

    def __enter__(self) -> "StagingEntry":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class CleartextStage:
    """Process-private directory that holds cleartext while it is edited.

    The directory must be owned by the caller with mode exactly 0700.
    """

    def __init__(self, configured_root: str = ""):
        root = Path(configured_root) if configured_root else default_staging_root()
        try:
            st = root.stat()
        except FileNotFoundError:
            raise NotFoundError(f"Cleartext directory not found: {root}") from None
        except OSError as e:
            raise StoreIOError(f"Cannot stat cleartext directory {root}: {e}") from e

        if not stat.S_ISDIR(st.st_mode):
            raise NotFoundError(f"Cleartext directory is not a directory: {root}")
        mode = stat.S_IMODE(st.st_mode) & 0o777
        if mode != REQUIRED_DIRECTORY_MODE:
            raise BadPermissionsError(
                f"Cleartext directory {root} has mode {mode:04o}, expected {REQUIRED_DIRECTORY_MODE:04o}"
            )
        self._root = root

    @property
    def root(self) -> Path:
        return self._root

    def new_entry(self) -> StagingEntry:
        try:
            fd, tmp = tempfile.mkstemp(prefix=CLEARTEXT_PREFIX, dir=str(self._root))
        except OSError as e:
            raise StoreIOError(f"Cannot create cleartext file in {self._root}: {e}") from e
        return StagingEntry(fd, Path(tmp))

    @staticmethod
    def encrypted_contents_for(staging_path: Path) -> bytes:
        """Read the ciphertext gpg wrote next to ``staging_path``."""
        sibling = _encrypted_sibling(staging_path)
        try:
            return sibling.read_bytes()
        except FileNotFoundError:
            raise NotFoundError(f"Encrypted output not found: {sibling}") from None
        except OSError as e:
            raise StoreIOError(f"Cannot read encrypted output {sibling}: {e}") from e

    @staticmethod
    def remove_encrypted_output_of(staging_path: Path) -> None:
        sibling = _encrypted_sibling(staging_path)
        try:
            sibling.unlink()
        except FileNotFoundError:
            raise NotFoundError(f"Encrypted output not found: {sibling}") from None
        except OSError as e:
            raise StoreIOError(f"Cannot remove encrypted output {sibling}: {e}") from e
