from __future__ import annotations

from pathlib import Path
from typing import Protocol

from .models import ShowDestination


class ExternalCommands(Protocol):
    def decrypt_to_string(self, entry_path: Path) -> bytes:
        raise NotImplementedError

    def invoke_editor(self, staging_path: Path) -> None:
        raise NotImplementedError

    def encrypt(self, staging_path: Path) -> None:
        raise NotImplementedError

    def decrypt_and_deliver(self, entry_path: Path, destination: ShowDestination) -> None:
        raise NotImplementedError

    def clear_clipboard(self) -> None:
        raise NotImplementedError
