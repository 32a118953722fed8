"""Content fingerprints for exact-match comparison."""

import hashlib


def fingerprint(text: str) -> str:
    """Compute the MD5 hex digest of canonical text."""
    return hashlib.md5(text.encode()).hexdigest()
