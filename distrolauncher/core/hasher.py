"""Streaming SHA-256 helpers for artifact integrity checks.

Files are always hashed in bounded chunks so memory use does not depend on
artifact size.
"""

from __future__ import annotations

import hashlib
from pathlib import Path

DEFAULT_CHUNK_SIZE = 64 * 1024


def sha256_file(path: Path | str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """Return the SHA-256 hex digest of a file, read in ``chunk_size`` pieces."""
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            h.update(chunk)
    return h.hexdigest()


def normalize_digest(digest: str) -> str:
    """Lower-case a hex digest and strip an optional ``sha256:`` prefix."""
    digest = digest.strip().lower()
    return digest.removeprefix("sha256:")


def digests_match(expected: str, actual: str) -> bool:
    """Case-insensitive comparison of two hex digests."""
    return normalize_digest(expected) == normalize_digest(actual)
