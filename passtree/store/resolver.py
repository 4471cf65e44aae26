from __future__ import annotations

from pathlib import Path, PurePosixPath

from ..errors import NotFoundError, PathEscapeError, StoreIOError
from ..models import GPG_EXTENSION


DEFAULT_STORE_DIRNAME = ".password-store"


def default_store_root() -> Path:
    return Path.home() / DEFAULT_STORE_DIRNAME


class StoreResolver:
    """Maps symbolic entry names to paths under the password store root.

    Every path handed out is canonical and lies at or beneath the canonical
    root. The root is fixed at construction.
    """

    def __init__(self, configured_root: str = ""):
        root = Path(configured_root) if configured_root else default_store_root()
        if not root.is_dir():
            raise NotFoundError(f"Password store not found: {root}")
        try:
            self._root = root.resolve(strict=True)
        except OSError as e:
            raise StoreIOError(f"Cannot canonicalize store root {root}: {e}") from e

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, name: str, must_exist: bool = True) -> Path:
        """Return the canonical entry path for symbolic ``name``.

        The extension marker is appended to the whole final component, so
        ``klaus.txt`` becomes ``klaus.txt.gpg``.

        Raises:
            PathEscapeError: if the canonical path leaves the store root.
            NotFoundError: if ``must_exist`` and the entry does not exist.
        """
        candidate = self._root / name
        candidate = candidate.with_name(candidate.name + GPG_EXTENSION)
        canonical = self._canonicalize(candidate)
        if must_exist and not canonical.exists():
            raise NotFoundError(f"Entry not found: {name}")
        return canonical

    def resolve_subdirectory(self, relative: str) -> Path:
        canonical = self._canonicalize(self._root / relative)
        if not canonical.is_dir():
            raise NotFoundError(f"Not a directory in password store: {relative}")
        return canonical

    def symbolic_name_for(self, entry_path: Path) -> str:
        if not entry_path.is_absolute():
            raise ValueError(f"Expected an absolute path: {entry_path}")
        try:
            rel = PurePosixPath(entry_path.relative_to(self._root).as_posix())
        except ValueError:
            raise ValueError(f"Path is outside the password store: {entry_path}") from None

        if not rel.parts:
            return ""
        name = rel.as_posix()
        if name.endswith(GPG_EXTENSION):
            name = name[: -len(GPG_EXTENSION)]
        return name

    def _canonicalize(self, candidate: Path) -> Path:
        # Symlinks are followed as far as they exist; ".." is collapsed after that.
        try:
            canonical = candidate.resolve()
        except (OSError, RuntimeError) as e:
            raise StoreIOError(f"Cannot resolve {candidate}: {e}") from e

        if canonical != self._root and self._root not in canonical.parents:
            raise PathEscapeError(f"bad path: {canonical}")
        return canonical
