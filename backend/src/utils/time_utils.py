"""Timestamp helpers shared by the drying services."""

from datetime import UTC, datetime


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def parse_iso_timestamp(value: str | None) -> datetime | None:
    """
    Parse an ISO-8601 timestamp, tolerating a trailing Z.

    Returns:
        Timezone-aware datetime, or None for missing or malformed input
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (TypeError, ValueError):
        return None
    return ensure_utc(parsed)


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600
