"""SHA-256 integrity digests over annotated text."""
from __future__ import annotations

import hashlib

from authormark.types import MAX_DIGEST_LENGTH, MIN_DIGEST_LENGTH


def compute_digest(text: str, length: int = MAX_DIGEST_LENGTH) -> str:
    """Hex SHA-256 of the UTF-8 encoding of ``text``, truncated to ``length``.

    Raises:
        ValueError: if ``length`` is outside [32, 64]. This is a caller bug,
            so it is never clamped.
    """
    if not MIN_DIGEST_LENGTH <= length <= MAX_DIGEST_LENGTH:
        raise ValueError(
            f"digest length must be between {MIN_DIGEST_LENGTH} and "
            f"{MAX_DIGEST_LENGTH} hex characters, got {length}",
        )
    return hashlib.sha256(text.encode("utf-8")).hexdigest()[:length]


def digest_matches(text: str, expected: str) -> bool:
    """Compare ``expected`` against a digest truncated to the same length.

    Stored values whose length is out of bounds cannot match.
    """
    if not MIN_DIGEST_LENGTH <= len(expected) <= MAX_DIGEST_LENGTH:
        return False
    return compute_digest(text, len(expected)) == expected
