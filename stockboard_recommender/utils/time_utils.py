"""
Time helpers for recency scoring.

Snapshots may carry naive timestamps (the fetch layer does not always attach
a zone); they are interpreted as UTC so that age arithmetic never mixes
naive and aware datetimes.
"""

from __future__ import annotations

from datetime import datetime, timezone

_SECONDS_PER_HOUR = 3600.0


def utcnow() -> datetime:
    """Return the current UTC datetime with timezone info.

    Prefer this over ``datetime.utcnow()`` (which returns naive datetimes).
    """
    return datetime.now(tz=timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to a naive datetime; convert aware datetimes to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def hours_between(earlier: datetime, later: datetime) -> float:
    """Return ``later - earlier`` in fractional hours (negative if reversed)."""
    return (ensure_utc(later) - ensure_utc(earlier)).total_seconds() / _SECONDS_PER_HOUR
