"""Date-time helpers for timestamps and semester buckets."""

from datetime import date, datetime, timezone


def utcnow() -> datetime:
    """Return the current UTC time as a naive datetime, as stored in the database."""

    return datetime.now(timezone.utc).replace(tzinfo=None)


def semester_bucket(now: datetime | None = None) -> date:
    """Return the first day of the semester (Jan 1 or Jul 1) for the timestamp (UTC)."""

    current = now.astimezone(timezone.utc) if now else datetime.now(timezone.utc)
    return date(current.year, 1 if current.month <= 6 else 7, 1)
