"""Time utilities for timestamp parsing and UTC formatting."""

from datetime import date, datetime, timezone
from typing import Any, Optional

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utc_now_z() -> str:
    """
    Get current UTC time as ISO 8601 string with Z suffix.

    Returns:
        ISO 8601 UTC timestamp ending with 'Z' (e.g., '2025-05-04T00:27:07.804867Z')
    """
    return to_utc_z(datetime.now(timezone.utc))


def to_utc_z(dt: datetime) -> str:
    """
    Convert datetime to ISO 8601 UTC string with Z suffix.

    Args:
        dt: Datetime object (must be timezone-aware)

    Returns:
        ISO 8601 UTC timestamp ending with 'Z'

    Raises:
        ValueError: If datetime is naive (not timezone-aware)
    """
    if dt.tzinfo is None:
        raise ValueError(
            f"Naive datetime not allowed. Got {dt}. "
            "Use datetime.now(timezone.utc) or dt.replace(tzinfo=timezone.utc)"
        )

    dt_utc = dt.astimezone(timezone.utc)
    return dt_utc.isoformat().replace('+00:00', 'Z')


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a backend timestamp into an aware UTC datetime.

    Accepts ISO 8601 strings (with or without 'Z'), datetime and date objects,
    and epoch milliseconds. Naive values are assumed to be UTC.

    Returns:
        Aware datetime in UTC, or None if the value cannot be parsed
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)):
        try:
            dt = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z") or text.endswith("z"):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except (ValueError, OverflowError):
            return None
    else:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    try:
        return dt.astimezone(timezone.utc)
    except (OverflowError, ValueError):
        # offset pushes the instant outside the datetime range
        return None


def to_epoch_millis(dt: datetime) -> int:
    """Epoch milliseconds for an aware datetime (naive values are taken as UTC)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)
