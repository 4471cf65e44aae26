from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema
import yaml

from ..errors import ConfigError, NotFoundError
from ..external.clipboard import CLIPBOARD_CLEAR_SECONDS


CONFIG_ENV = "PASSTREE_CONFIG"
DEFAULT_CONFIG_REL_PATH = Path("passtree") / "config.yml"


@dataclass(frozen=True)
class PassTreeConfig:
    store_dir: str = ""
    staging_dir: str = ""
    clipboard_clear_seconds: int = CLIPBOARD_CLEAR_SECONDS
    colorize: bool = True
    gpg_binary: str = "gpg"
    clipboard_binary: str = "wl-copy"
    qrencode_binary: str = "qrencode"


def _config_schema() -> Dict[str, Any]:
    return {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "type": "object",
        "properties": {
            "store_dir": {"type": "string"},
            "staging_dir": {"type": "string"},
            "clipboard_clear_seconds": {"type": "integer", "minimum": 0},
            "colorize": {"type": "boolean"},
            "gpg_binary": {"type": "string", "minLength": 1},
            "clipboard_binary": {"type": "string", "minLength": 1},
            "qrencode_binary": {"type": "string", "minLength": 1},
        },
        "additionalProperties": False,
    }


def default_config_path() -> Path:
    xdg = str(os.environ.get("XDG_CONFIG_HOME", "") or "").strip()
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / DEFAULT_CONFIG_REL_PATH


def resolve_config_path(cli_path: Optional[str] = None) -> Path:
    """Resolve the config YAML path.

    Precedence:
      1) CLI flag --config
      2) PASSTREE_CONFIG
      3) $XDG_CONFIG_HOME/passtree/config.yml (~/.config when unset)
    """
    if cli_path and str(cli_path).strip():
        return Path(str(cli_path).strip()).expanduser()

    env_path = str(os.environ.get(CONFIG_ENV, "") or "").strip()
    if env_path:
        return Path(env_path).expanduser()

    return default_config_path()


def load_config(cli_path: Optional[str] = None) -> PassTreeConfig:
    """Load and validate the passtree config.

    An explicitly named file (flag or env var) must exist. The default
    location is optional; when absent the built-in defaults apply.

    Raises:
        NotFoundError: if an explicitly named file is missing.
        ConfigError: if the file is unreadable or invalid.
    """
    explicit = bool((cli_path and str(cli_path).strip()) or str(os.environ.get(CONFIG_ENV, "") or "").strip())
    path = resolve_config_path(cli_path)

    if not path.exists():
        if explicit:
            raise NotFoundError(f"Missing passtree config: {path}")
        return PassTreeConfig()

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read config: {path}: {e}") from e

    try:
        data = yaml.safe_load(raw) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"config is not valid YAML: {path}: {e}") from e

    try:
        jsonschema.validate(instance=data, schema=_config_schema())
    except jsonschema.ValidationError as e:
        raise ConfigError(f"config schema validation failed: {path}: {e.message}") from e

    return PassTreeConfig(**data)
