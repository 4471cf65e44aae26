from __future__ import annotations

import signal
import sys
import time
from typing import Callable

from ..contracts import ExternalCommands


CLIPBOARD_CLEAR_SECONDS = 13


def wait_and_clear_clipboard(
    commands: ExternalCommands,
    target: str,
    seconds: int = CLIPBOARD_CLEAR_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Hold the clipboard for ``seconds`` and then clear it.

    Ctrl-C during the wait still clears the clipboard before exiting 1.
    """
    print(f"Clipped ``{target};'' clearing in {seconds}s")

    def _on_interrupt(signum, frame):
        print("Interrupted", file=sys.stderr)
        commands.clear_clipboard()
        raise SystemExit(1)

    previous = signal.signal(signal.SIGINT, _on_interrupt)
    try:
        sleep(seconds)
        commands.clear_clipboard()
    finally:
        signal.signal(signal.SIGINT, previous)
