from __future__ import annotations

from typing import Any, Literal, Tuple


ShowDestination = Literal["stdout", "clip", "qrcode"]
SHOW_DESTINATION_VALUES: Tuple[str, ...] = ("stdout", "clip", "qrcode")

GPG_EXTENSION = ".gpg"


def is_valid_show_destination(value: Any) -> bool:
    return str(value or "").strip() in SHOW_DESTINATION_VALUES
