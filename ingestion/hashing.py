"""
Content-addressing helpers for duplicate detection by the persistence layer.
"""

import hashlib


def hash_url(url: str) -> str:
    """SHA-256 hex digest of the exact URL string."""
    return hashlib.sha256(url.encode("utf-8")).hexdigest()


def hash_file(buffer: bytes) -> str:
    """SHA-256 hex digest of a file's bytes."""
    return hashlib.sha256(bytes(buffer)).hexdigest()
