"""
UTC timestamp utilities (stdlib-only).

Every wall-clock read in release-spine goes through utc_now() so tests
can pass an explicit ``now`` instead and callers never mix naive and
aware datetimes.
"""

from datetime import UTC, date, datetime, time


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def to_iso8601(dt: datetime | None) -> str | None:
    """Serialize a datetime to ISO-8601, passing ``None`` through."""
    return dt.isoformat() if dt else None


def start_of_day_utc(day: date) -> datetime:
    """Midnight UTC at the start of ``day``."""
    return datetime.combine(day, time.min, tzinfo=UTC)


def ensure_utc(dt: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
