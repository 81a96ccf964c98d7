"""Time helpers: epoch-millisecond conversion and human-readable spans."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

_SECOND = 1000
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR
_MONTH = 30 * _DAY
_YEAR = 365 * _DAY

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _two_units(major: int, major_unit: str, minor: int, minor_unit: str) -> str:
    text = f"{major} {major_unit}"
    if major < 10 and minor > 0:
        text += f" {minor} {minor_unit}"
    return text


def format_time_span(duration_ms: int) -> str:
    """Render a duration as its two most significant units.

    >>> format_time_span(3 * 3600 * 1000 + 2 * 60 * 1000)
    '3 hr 2 min'
    >>> format_time_span(1500)
    '1.5 sec'
    """
    duration_ms = max(duration_ms, 0)

    years, rest = divmod(duration_ms, _YEAR)
    months, rest = divmod(rest, _MONTH)
    days, rest = divmod(rest, _DAY)
    hours, rest = divmod(rest, _HOUR)
    minutes, rest = divmod(rest, _MINUTE)
    seconds, millis = divmod(rest, _SECOND)

    if years > 0:
        return _two_units(years, "yr", months, "mo")
    if months > 0:
        return _two_units(months, "mo", days, "days")
    if days > 0:
        return _two_units(days, "days", hours, "hr")
    if hours > 0:
        return _two_units(hours, "hr", minutes, "min")
    if minutes > 0:
        return _two_units(minutes, "min", seconds, "sec")
    if seconds >= 10:
        return f"{seconds} sec"
    if seconds >= 1:
        return f"{seconds + millis / 1000:.1f} sec"
    return f"{millis} ms"


def datetime_to_epoch_ms(value: datetime) -> int:
    """Exact epoch milliseconds of a timezone-aware datetime, floored."""
    return (value - _EPOCH) // timedelta(milliseconds=1)


def epoch_ms_to_datetime(value_ms: int) -> datetime:
    return _EPOCH + timedelta(milliseconds=value_ms)


def xs_datetime(value_ms: int) -> str:
    """Format an epoch value as an ``xs:dateTime`` string (UTC, second precision)."""
    return epoch_ms_to_datetime(value_ms).strftime("%Y-%m-%dT%H:%M:%SZ")
