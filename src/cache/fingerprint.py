# src/cache/fingerprint.py — v2
"""Content fingerprint for change detection of the document context.

The hash only has to tell "same normalized text" from "different
normalized text"; it is not a security boundary.
"""

from __future__ import annotations

import hashlib

_DIGEST_SIZE = 16


def content_fingerprint(text: str) -> str:
    """Fast BLAKE2b digest (hex) of already-normalized context text."""
    return hashlib.blake2b(text.encode("utf-8"), digest_size=_DIGEST_SIZE).hexdigest()


def fingerprints_differ(old: str | None, new: str) -> bool:
    """True when ``new`` should replace the cached content (None = never loaded)."""
    return old is None or old != new
