"""User configuration.

The YAML file is optional; every key has a built-in default. Empty
``store_dir`` / ``staging_dir`` defer to ~/.password-store and
$XDG_RUNTIME_DIR respectively.
"""

from __future__ import annotations

from .load_config import (  # noqa: F401
    PassTreeConfig,
    default_config_path,
    load_config,
    resolve_config_path,
)
