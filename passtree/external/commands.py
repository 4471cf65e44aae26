"""Adapters for the external binaries passtree drives.

gpg does the cryptography, $EDITOR edits cleartext, wl-copy owns the
clipboard and qrencode draws QR codes. Every failure of any of them is
reported as SubprocessError.
"""

from __future__ import annotations

import os
import shlex
import subprocess
import sys
from pathlib import Path
from typing import Dict, List, Optional

from ..errors import NotFoundError, SubprocessError
from ..models import ShowDestination, is_valid_show_destination


EDITOR_ENV = "EDITOR"
DISPLAY_ENV = "DISPLAY"


def check_returncode(returncode: int) -> None:
    if returncode == 0:
        return
    if returncode < 0:
        raise SubprocessError(f"subprocess signaled with {-returncode}")
    raise SubprocessError(f"subprocess failed with code {returncode}")


def _env_without_display() -> Dict[str, str]:
    # Keeps pinentry on the terminal instead of popping a window.
    env = dict(os.environ)
    env.pop(DISPLAY_ENV, None)
    return env


def _run(
    argv: List[str],
    *,
    input: Optional[bytes] = None,
    capture_output: bool = False,
    stdout=None,
    stderr=None,
    env: Optional[Dict[str, str]] = None,
) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(
            argv,
            input=input,
            capture_output=capture_output,
            stdout=stdout,
            stderr=stderr,
            env=env,
        )
    except OSError as e:
        raise SubprocessError(f"cannot run {argv[0]}: {e}") from e


class GpgExternalCommands:
    """ExternalCommands backed by gpg, $EDITOR, wl-copy and qrencode."""

    def __init__(
        self,
        *,
        gpg_binary: str = "gpg",
        clipboard_binary: str = "wl-copy",
        qrencode_binary: str = "qrencode",
    ):
        self.gpg_binary = gpg_binary
        self.clipboard_binary = clipboard_binary
        self.qrencode_binary = qrencode_binary

    def decrypt_to_string(self, entry_path: Path) -> bytes:
        proc = _run(
            [self.gpg_binary, "--quiet", "-d", str(entry_path)],
            capture_output=True,
            env=_env_without_display(),
        )
        if proc.returncode != 0:
            stderr = (proc.stderr or b"").decode("utf-8", errors="replace").strip()
            raise SubprocessError(f"failed to decrypt: ``{stderr}''")
        return proc.stdout or b""

    def invoke_editor(self, staging_path: Path) -> None:
        editor = (os.environ.get(EDITOR_ENV) or "").strip()
        if not editor:
            raise NotFoundError(f"{EDITOR_ENV} is not set")
        proc = _run(shlex.split(editor) + [str(staging_path)])
        check_returncode(proc.returncode)

    def encrypt(self, staging_path: Path) -> None:
        """Encrypt to self; gpg writes ``<staging_path>.gpg`` alongside."""
        proc = _run(
            [self.gpg_binary, "--quiet", "-e", "--default-recipient-self", str(staging_path)],
            env=_env_without_display(),
        )
        check_returncode(proc.returncode)

    def decrypt_and_deliver(self, entry_path: Path, destination: ShowDestination) -> None:
        if not is_valid_show_destination(destination):
            raise ValueError(f"Unknown show destination: {destination!r}")

        # Entries never carry meaningful leading/trailing whitespace.
        cleartext = self.decrypt_to_string(entry_path).strip()

        if destination == "stdout":
            out = sys.stdout.buffer
            out.write(cleartext + b"\n")
            out.flush()
            return

        if destination == "clip":
            proc = _run(
                [self.clipboard_binary],
                input=cleartext,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        else:
            proc = _run(
                [self.qrencode_binary, "-t", "utf8"],
                input=cleartext,
                stderr=subprocess.DEVNULL,
            )
        check_returncode(proc.returncode)

    def clear_clipboard(self) -> None:
        proc = _run([self.clipboard_binary, "-c"])
        check_returncode(proc.returncode)
