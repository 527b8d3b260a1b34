"""Timestamp helpers.

All timestamps are stored in UTC. SQLite hands ``DateTime(timezone=True)``
columns back without tzinfo, so values read from the database are normalised
with :func:`ensure_utc` before they are compared with :func:`utc_now`.
"""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive values, convert aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
