from __future__ import annotations


class PassTreeError(Exception):
    """Base class for password store errors."""


class NotFoundError(PassTreeError):
    """Raised when a store root, entry, directory or environment variable is missing."""


class BadPermissionsError(PassTreeError):
    """Raised when the cleartext staging directory is not mode 0700."""


class StoreIOError(PassTreeError):
    """Raised on filesystem failures while resolving or cleaning up paths."""


class PathEscapeError(StoreIOError):
    """Raised when a symbolic name canonicalizes to a location outside the store root."""


class SubprocessError(PassTreeError):
    """Raised when an external tool exits non-zero, is signaled, or cannot be started."""


class ConfigError(PassTreeError):
    """Raised when the configuration file fails validation."""
