"""Timestamp normalization for backend records."""

from datetime import datetime, timezone
from typing import Any

from chatlist.errors import MalformedPayload


def parse_timestamp(value: Any) -> datetime:
    """
    Normalize a backend timestamp to an aware datetime.

    Accepts ISO-8601 strings (naive ones are read as UTC), epoch seconds,
    or datetime objects.

    Raises:
        MalformedPayload: If the value cannot be read as a timestamp
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (ValueError, OverflowError, OSError) as e:
            raise MalformedPayload(f"Invalid timestamp: {value!r}") from e
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError as e:
            raise MalformedPayload(f"Invalid timestamp: {value!r}") from e
    else:
        raise MalformedPayload(f"Invalid timestamp: {value!r}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
