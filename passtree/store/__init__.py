"""Password store layout: name resolution, enumeration and tree drawing."""

from __future__ import annotations

from .resolver import StoreResolver, default_store_root
from .walker import TreeWalker
from .renderer import TreeRenderer

__all__ = [
    "StoreResolver",
    "default_store_root",
    "TreeWalker",
    "TreeRenderer",
]
