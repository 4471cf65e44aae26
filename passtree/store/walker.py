from __future__ import annotations

import os
from pathlib import Path
from typing import List

from ..models import GPG_EXTENSION
from .resolver import StoreResolver


def _is_entry_file(path: Path) -> bool:
    # is_file() follows symlinks and is False for broken ones.
    return path.name.endswith(GPG_EXTENSION) and path.is_file()


def _collect_entries(top: Path) -> List[Path]:
    out: List[Path] = []
    # os.walk drops unreadable directories when onerror is unset.
    for dirpath, _dirnames, filenames in os.walk(top):
        base = Path(dirpath)
        for fn in filenames:
            p = base / fn
            if _is_entry_file(p):
                out.append(p)
    return sorted(out, key=str)


class TreeWalker:
    """Enumerates store entries in canonical sorted order."""

    def __init__(self, resolver: StoreResolver):
        self.resolver = resolver

    def walk(self, subdirectory: str = "", search_term: str = "") -> List[Path]:
        """Return entry paths for the whole store, one subdirectory, or a search.

        ``subdirectory`` (used by show) and ``search_term`` (used by find) are
        mutually exclusive.
        """
        if subdirectory and search_term:
            raise ValueError("subdirectory and search_term are mutually exclusive")

        if subdirectory:
            return self.walk_subdirectory(subdirectory)
        if search_term:
            return self.walk_search(search_term)
        return _collect_entries(self.resolver.root)

    def walk_subdirectory(self, subdirectory: str) -> List[Path]:
        top = self.resolver.resolve_subdirectory(subdirectory)
        return _collect_entries(top)

    def walk_search(self, search_term: str) -> List[Path]:
        return [
            p
            for p in _collect_entries(self.resolver.root)
            if search_term in self.resolver.symbolic_name_for(p)
        ]
