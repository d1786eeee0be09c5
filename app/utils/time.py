from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current instant as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(dt: datetime) -> datetime:
    """
    Interprets naive timestamps as UTC and returns timezone-aware UTC.

    SQLite hands back naive datetimes even for timezone-aware columns.
    """
    if dt.tzinfo is None or dt.utcoffset() is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_iso_z(dt: datetime) -> str:
    """Format as ISO-8601 UTC with a trailing Z, e.g. 2026-01-01T00:00:00Z."""
    return as_utc(dt).isoformat().replace("+00:00", "Z")
