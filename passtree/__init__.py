"""passtree: a gpg-backed password store drawn as a tree.

Entries live under ~/.password-store as individually encrypted ``.gpg``
files and are addressed by slash-separated names such as ``email/work``.
Encryption, editing, clipboard and QR output are delegated to external
programs; cleartext only ever touches a 0700 staging directory.
"""

from __future__ import annotations

__version__ = "0.3.0"
