"""Calendar helpers for epoch-millisecond instants.

All functions take an optional ``tz``; ``None`` means the system local zone.
"""

import logging
from datetime import date, datetime, time, tzinfo

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60
MS_PER_DAY = SECONDS_PER_DAY * 1000
MS_PER_HOUR = 60 * 60 * 1000
MS_PER_MINUTE = 60 * 1000


def to_datetime(ms: int, tz: tzinfo | None = None) -> datetime:
    """Convert epoch milliseconds to an aware datetime in ``tz``."""
    dt = datetime.fromtimestamp(ms / 1000, tz)
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt


def local_date(ms: int, tz: tzinfo | None = None) -> date:
    """Calendar date of ``ms`` in ``tz``."""
    return to_datetime(ms, tz).date()


def day_start_ms(day: date, tz: tzinfo | None = None) -> int:
    """Return the instant of 00:00 on ``day``, using the offset in force at that midnight."""
    if tz is None:
        midnight = datetime.combine(day, time()).astimezone()
    else:
        midnight = datetime.combine(day, time(), tzinfo=tz)
    return int(midnight.timestamp()) * 1000


def local_midnight_ms(ms: int, tz: tzinfo | None = None) -> int:
    """Return the instant of 00:00 on the calendar day containing ``ms``."""
    return day_start_ms(local_date(ms, tz), tz)


def zone_offset_seconds(ms: int, tz: tzinfo | None = None) -> int:
    """UTC offset of ``tz`` at instant ``ms``, in seconds."""
    offset = to_datetime(ms, tz).utcoffset()
    return int(offset.total_seconds()) if offset is not None else 0


def format_instant(ms: int, pattern: str, tz: tzinfo | None = None) -> str | None:
    """Format an instant with a strftime pattern.

    Returns None when the platform cannot represent the instant, so callers
    can skip the label instead of failing the whole frame.
    """
    try:
        return to_datetime(ms, tz).strftime(pattern)
    except (ValueError, OverflowError, OSError) as e:
        logger.warning("Cannot format instant %s with '%s': %s", ms, pattern, e)
        return None


def parse_instant(value: int | str, tz: tzinfo | None = None) -> int:
    """Parse epoch milliseconds or an ISO-8601 string into epoch milliseconds.

    Naive ISO strings are interpreted in ``tz``.

    Raises:
        ValueError: If the value is neither an int nor a parseable string
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid instant: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("-").isdigit():
            return int(text)
        dt = datetime.fromisoformat(text)
        if dt.tzinfo is None and tz is not None:
            dt = dt.replace(tzinfo=tz)
        return round(dt.timestamp() * 1000)
    raise ValueError(f"Invalid instant: {value!r}")


def now_ms() -> int:
    """Wall-clock now in epoch milliseconds."""
    return int(datetime.now().timestamp() * 1000)
