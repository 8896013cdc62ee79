"""Helpers for content-addressed file identifiers."""

from __future__ import annotations

import re

from domain.exceptions import ValidationError

_HEX_DIGEST = re.compile(r"^[0-9a-f]{4,128}$")


def validate_content_hash(content_hash: str) -> str:
    """Return the normalised content hash or raise ValidationError.

    A content hash is a lowercase hexadecimal digest of even length
    (40 characters for SHA-1).
    """
    if not isinstance(content_hash, str):
        msg = f"Content hash must be a string, got {type(content_hash).__name__}"
        raise ValidationError(msg)

    normalised = content_hash.strip().lower()
    if not _HEX_DIGEST.match(normalised) or len(normalised) % 2:
        msg = f"Invalid content hash: {content_hash!r}"
        raise ValidationError(msg)
    return normalised


def content_path(content_hash: str) -> str:
    """Return the two-level fan-out path used on both storage tiers.

    ``da39a3ee...`` is stored at ``da/39/da39a3ee...``.
    """
    normalised = validate_content_hash(content_hash)
    return f"{normalised[0:2]}/{normalised[2:4]}/{normalised}"
