from __future__ import annotations

import sys
import time
from pathlib import Path
from typing import Callable, Optional

from rich.console import Console

from .contracts import ExternalCommands
from .errors import NotFoundError, PassTreeError, StoreIOError
from .external.clipboard import CLIPBOARD_CLEAR_SECONDS, wait_and_clear_clipboard
from .models import ShowDestination
from .staging.cleartext import CleartextStage
from .store.renderer import TreeRenderer
from .store.resolver import StoreResolver
from .utils.fs import atomic_write_bytes


def _check_parent_is_directory(target: str, target_path: Path) -> None:
    # The nearest existing ancestor decides whether the entry can be written.
    for parent in target_path.parents:
        if parent.exists():
            if not parent.is_dir():
                raise StoreIOError(f"Cannot create {target}: {parent} is not a directory")
            return


class CommandRunner:
    """Implements the show, edit and find commands against one store."""

    def __init__(
        self,
        *,
        resolver: StoreResolver,
        renderer: TreeRenderer,
        commands: ExternalCommands,
        staging_dir: str = "",
        clipboard_clear_seconds: int = CLIPBOARD_CLEAR_SECONDS,
        console: Optional[Console] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.resolver = resolver
        self.renderer = renderer
        self.commands = commands
        self.staging_dir = staging_dir
        self.clipboard_clear_seconds = clipboard_clear_seconds
        self.console = console if console is not None else Console(highlight=False)
        self.sleep = sleep

    def show(self, target: str, destination: ShowDestination = "stdout") -> None:
        # A target that names a subdirectory (or nothing) is drawn as a tree.
        try:
            render = self.renderer.draw_tree_text(subdirectory=target)
        except PassTreeError:
            render = None
        if render is not None:
            self.console.print(render, soft_wrap=True)
            return

        path = self.resolver.path_for(target)
        if not path.is_file():
            raise NotFoundError(f"Entry not found: {target}")
        self.commands.decrypt_and_deliver(path, destination)

        if destination == "clip":
            wait_and_clear_clipboard(self.commands, target, self.clipboard_clear_seconds, sleep=self.sleep)

    def find(self, search_term: str) -> None:
        self.console.print(self.renderer.draw_tree_text(search_term=search_term), soft_wrap=True)

    def edit(self, target: str) -> None:
        target_path = self.resolver.path_for(target, must_exist=False)
        _check_parent_is_directory(target, target_path)
        encrypted = self.encrypted_edited_entry(target, target_path)
        atomic_write_bytes(target_path, encrypted)

    def encrypted_edited_entry(self, target: str, target_path: Path) -> bytes:
        """Run decrypt, edit and encrypt for ``target`` through a staging entry.

        Returns the new ciphertext. The cleartext file is removed on every
        exit path.
        """
        stage = CleartextStage(self.staging_dir)

        with stage.new_entry() as entry:
            if target_path.is_file():
                entry.write(self.commands.decrypt_to_string(target_path))
            else:
                print(f"[edit] INFO: {target} does not exist yet; creating it", file=sys.stderr)

            self.commands.invoke_editor(entry.path)
            self.commands.encrypt(entry.path)
            encrypted = stage.encrypted_contents_for(entry.path)
            stage.remove_encrypted_output_of(entry.path)

        return encrypted
