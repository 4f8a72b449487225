"""Date helpers shared by the models, store adapters and outer surfaces."""

from datetime import date, datetime, timezone
from typing import Optional


def parse_date(value) -> Optional[date]:
    """Parse a calendar date from ``YYYY-MM-DD`` text, a date or a datetime.

    Returns None for empty values. Raises ValueError for text that is not
    an ISO date; ISO timestamps are accepted and truncated to their date.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        return datetime.fromisoformat(text).date()


def parse_timestamp(value) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def start_of_day_utc(day: date) -> datetime:
    """The instant a calendar date begins, in UTC."""
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def fmt_date(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


def fmt_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None
