from __future__ import annotations

from .cleartext import CleartextStage, StagingEntry, default_staging_root  # noqa: F401
