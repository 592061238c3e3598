"""
Common time primitives for the rotation core.

Every timestamp that enters or leaves the core goes through this module:
- RFC3339 is the only wire format.
- All instants are normalized to UTC before they are rendered.
- Calendar arithmetic rolls day overflow into the next month instead of
  clamping, so existing state computed that way stays reproducible.
"""
from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Callable

from rotating.core.errors import ParseError

UTC = timezone.utc

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

# Value of an offset computation that never assigned anything.
ZERO_TIME = datetime(1, 1, 1, tzinfo=UTC)

Clock = Callable[[], datetime]

_RFC3339 = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"T(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
    r"(?P<fraction>\.\d+)?"
    r"(?P<offset>Z|[+-]\d{2}:\d{2})\Z",
    re.ASCII,
)


def system_clock() -> datetime:
    """Current instant, UTC."""
    return datetime.now(UTC)


def parse_rfc3339(value: str) -> datetime:
    """Parse an RFC3339 timestamp into a UTC-normalized datetime.

    Fractional seconds are kept down to microseconds. Raises ParseError with
    the diagnostic of whatever check failed.
    """
    match = _RFC3339.match(value)
    if match is None:
        raise ParseError(value, "expected layout YYYY-MM-DDTHH:MM:SS[.fraction](Z|+HH:MM|-HH:MM)")

    parts = match.groupdict()
    fraction = parts["fraction"] or ""
    microsecond = int((fraction[1:] + "000000")[:6]) if fraction else 0

    try:
        tz = _parse_offset(parts["offset"])
        dt = datetime(
            int(parts["year"]),
            int(parts["month"]),
            int(parts["day"]),
            int(parts["hour"]),
            int(parts["minute"]),
            int(parts["second"]),
            microsecond,
            tzinfo=tz,
        )
        return dt.astimezone(UTC)
    except (ValueError, OverflowError) as e:
        raise ParseError(value, str(e)) from e


def _parse_offset(raw: str) -> timezone:
    if raw == "Z":
        return UTC
    sign = -1 if raw[0] == "-" else 1
    hours, minutes = int(raw[1:3]), int(raw[4:6])
    if minutes > 59:
        raise ValueError(f"offset minute out of range: {raw}")
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def format_rfc3339(dt: datetime) -> str:
    """Render `dt` as YYYY-MM-DDTHH:MM:SSZ in UTC, truncating sub-seconds."""
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    utc = dt.astimezone(UTC).replace(microsecond=0, tzinfo=None)
    return utc.isoformat() + "Z"


def unix_seconds(dt: datetime) -> int:
    """Whole seconds since the epoch, floored."""
    return (dt - EPOCH) // timedelta(seconds=1)


def truncate_to_second(dt: datetime) -> datetime:
    return dt.replace(microsecond=0)


def add_calendar(dt: datetime, *, years: int = 0, months: int = 0, days: int = 0) -> datetime:
    """Add calendar units to `dt`.

    Years and months are applied to the year/month pair first, keeping the
    day number. A day number past the end of the resulting month rolls over:
    Jan 31 + 1 month lands on Mar 3 (Mar 2 in leap years). Days are added
    last as whole days, which is exact in UTC.
    """
    month_index = dt.month - 1 + months
    year = dt.year + years + month_index // 12
    month = month_index % 12 + 1
    try:
        first_of_month = dt.replace(year=year, month=month, day=1)
    except ValueError as e:
        raise OverflowError(f"date value out of range: year {year}") from e
    return first_of_month + timedelta(days=dt.day - 1 + days)


def add_duration(dt: datetime, *, hours: int = 0, minutes: int = 0) -> datetime:
    """Add exact elapsed time to `dt`."""
    return dt + timedelta(hours=hours, minutes=minutes)
