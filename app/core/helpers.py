"""
Helper functions for common infrastructure operations.

These utilities are pure infrastructure - they have no knowledge
of accounts, postings, or balances.

Usage:
    from core.helpers import parse_uuid

    account_uuid = parse_uuid(raw_id)  # None when malformed
"""

from __future__ import annotations

import uuid


def parse_uuid(value: uuid.UUID | str | None) -> uuid.UUID | None:
    """
    Convert a UUID or its string form to uuid.UUID.

    Args:
        value: UUID instance, UUID string, or None

    Returns:
        The parsed UUID, or None if the value is missing or malformed
    """
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (ValueError, TypeError, AttributeError):
        return None
