"""Utility helpers shared across the package."""

from __future__ import annotations

from datetime import datetime, timezone
import hashlib


def sha256_hex(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def slug(text: str) -> str:
    """Lowercase and replace spaces with dashes ('Acme Corp' -> 'acme-corp')."""
    return text.lower().replace(" ", "-")


def wire_identifier(organization: str, identifier: str, pubkey_hex: str) -> str:
    """Compose the `d` tag value: org slug, logical id, first 8 hex chars of the publisher key.

    Two publishers reusing the same logical identifier never replace each
    other's events.
    """
    return f"{slug(organization)}-{identifier}-{pubkey_hex[:8]}"


def format_number(value: float) -> str:
    """Render integral floats without a trailing '.0' (120000.0 -> '120000')."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def timestamp_to_date(created_at: int) -> str:
    """Unix seconds to a UTC YYYY-MM-DD string."""
    return datetime.fromtimestamp(created_at, tz=timezone.utc).date().isoformat()
