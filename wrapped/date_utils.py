"""Timestamp parsing and time zone helpers."""

from datetime import datetime, timezone, tzinfo
from typing import Optional


def parse_timestamp(value) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp into an aware datetime.

    Naive timestamps are assumed to be UTC. Returns None for anything
    that is not a parseable string.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def localize(dt: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Convert to the given zone, or to the machine's local zone when tz is None."""
    return dt.astimezone(tz) if tz is not None else dt.astimezone()
