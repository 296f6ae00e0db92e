"""Event timing helpers.

Unparsable timestamps classify as UPCOMING: an event must never be hidden
from attendees because its dates are malformed.
"""

from datetime import datetime, timezone

from events.domain.value_objects import ScheduleStatus

INVALID_DATES = "Invalid dates"

Timestamp = datetime | str | None


def parse_timestamp(value: Timestamp) -> datetime | None:
    """Coerce a datetime or ISO-8601 string to an aware datetime, or None."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def classify_event_status(now: Timestamp, start: Timestamp, end: Timestamp) -> ScheduleStatus:
    current = parse_timestamp(now)
    starts_at = parse_timestamp(start)
    ends_at = parse_timestamp(end)
    if current is None or starts_at is None or ends_at is None:
        return ScheduleStatus.UPCOMING

    if current < starts_at:
        return ScheduleStatus.UPCOMING
    if current <= ends_at:
        return ScheduleStatus.ONGOING
    return ScheduleStatus.ENDED


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def describe_duration(start: Timestamp, end: Timestamp) -> str:
    """Span between start and end, floored to days, hours or minutes."""
    starts_at = parse_timestamp(start)
    ends_at = parse_timestamp(end)
    if starts_at is None or ends_at is None:
        return INVALID_DATES

    seconds = (ends_at - starts_at).total_seconds()
    hours = int(seconds // 3600)
    days = hours // 24
    if days > 0:
        return _plural(days, "day")
    if hours > 0:
        return _plural(hours, "hour")
    return _plural(int(seconds // 60), "minute")
