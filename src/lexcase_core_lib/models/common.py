"""Common helpers shared across the lifecycle models.

- utc_now(): timezone-aware current time
- parse_utc_timestamp(): ISO 8601 string → aware UTC datetime
- coerce_utc_datetime(): metadata value (datetime / date / string) → aware UTC datetime
"""

from datetime import date, datetime, time, timezone
from typing import Any, Optional


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime"""
    return datetime.now(timezone.utc)


def parse_utc_timestamp(timestamp_str: str) -> datetime:
    """Parse UTC timestamp string into timezone-aware datetime object.

    Handles multiple ISO 8601 formats:
    - '2025-10-17T04:02:59+00:00' (timezone-aware with +00:00)
    - '2025-10-17T04:02:59Z' (Zulu time suffix)
    - '2025-10-17T04:02:59.123Z' (JavaScript Date.toISOString())
    - '2025-10-17T04:02:59' (naive, assumed UTC)
    - '2025-10-17' (date only, midnight UTC)

    Args:
        timestamp_str: UTC timestamp string in various formats

    Returns:
        datetime: Timezone-aware datetime object in UTC

    Raises:
        ValueError: If the string is not ISO 8601
    """
    if timestamp_str.endswith('Z'):
        # Remove 'Z' suffix and parse
        dt = datetime.fromisoformat(timestamp_str[:-1])
    else:
        # Parse ISO format (handles +00:00 automatically)
        dt = datetime.fromisoformat(timestamp_str)
    # If naive, assume UTC
    return dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt.astimezone(timezone.utc)


def coerce_utc_datetime(value: Any) -> Optional[datetime]:
    """Interpret a metadata timestamp value.

    Args:
        value: datetime, date or ISO 8601 string

    Returns:
        Aware UTC datetime, or None if the value cannot be interpreted
    """
    if isinstance(value, datetime):
        return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, str) and value.strip():
        try:
            return parse_utc_timestamp(value.strip())
        except ValueError:
            return None
    return None
