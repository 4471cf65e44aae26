"""Thin wrappers around external programs (gpg, editor, clipboard, qrencode)."""

from __future__ import annotations

from .commands import GpgExternalCommands, check_returncode
from .clipboard import CLIPBOARD_CLEAR_SECONDS, wait_and_clear_clipboard

__all__ = [
    "GpgExternalCommands",
    "check_returncode",
    "CLIPBOARD_CLEAR_SECONDS",
    "wait_and_clear_clipboard",
]
