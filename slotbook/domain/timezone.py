"""
Conversions between absolute instants and timezone-qualified wall-clock time.

Every instant returned by this module is a ``pendulum.DateTime`` in UTC.
Wall-clock times are resolved with the offset in force before a transition
(``fold=0``): an ambiguous fall-back time maps to its first occurrence and a
time inside a spring-forward gap is pushed forward by the length of the gap.
"""

import re
from datetime import date as Date
from datetime import datetime
from datetime import timezone as dt_timezone
from typing import Tuple

import pendulum
from pendulum import DateTime

from .exceptions import InvalidDate, InvalidTimeFormat, InvalidTimezone

TIME_OF_DAY_PATTERN = re.compile(r"([01]\d|2[0-3]):([0-5]\d)")


def get_timezone(name: str):
    """
    Resolve an IANA timezone identifier.

    Raises:
        InvalidTimezone: If the identifier is empty or unknown
    """
    if not isinstance(name, str) or not name.strip():
        raise InvalidTimezone(f"Unknown timezone: {name!r}")

    try:
        return pendulum.timezone(name)
    except (ValueError, KeyError) as exc:
        raise InvalidTimezone(f"Unknown timezone: {name!r}") from exc


def parse_time_of_day(value: str) -> Tuple[int, int]:
    """
    Split an ``HH:mm`` string into hour and minute.

    Raises:
        InvalidTimeFormat: If the value is not a 24h ``HH:mm`` string
    """
    match = TIME_OF_DAY_PATTERN.fullmatch(value) if isinstance(value, str) else None
    if match is None:
        raise InvalidTimeFormat(f"Time must use the HH:mm format, got {value!r}")
    return int(match.group(1)), int(match.group(2))


def parse_date(value: str) -> Date:
    """Parse a ``YYYY-MM-DD`` calendar date."""
    try:
        parsed = pendulum.from_format(value, "YYYY-MM-DD")
    except (TypeError, ValueError) as exc:
        raise InvalidDate(f"Date must use the YYYY-MM-DD format, got {value!r}") from exc
    return parsed.date()


def to_utc(local_instant: datetime, timezone: str) -> DateTime:
    """
    Interpret the wall-clock fields of ``local_instant`` in ``timezone``.

    Any tzinfo attached to ``local_instant`` is ignored; only its date and
    time fields are used.
    """
    tz = get_timezone(timezone)
    wall = datetime(
        local_instant.year,
        local_instant.month,
        local_instant.day,
        local_instant.hour,
        local_instant.minute,
        local_instant.second,
        local_instant.microsecond,
        tzinfo=tz,
        fold=0,
    )
    return pendulum.instance(wall.astimezone(dt_timezone.utc))


def from_utc(instant: datetime, timezone: str) -> DateTime:
    """Return ``instant`` as observed in ``timezone``. Naive input is read as UTC."""
    tz = get_timezone(timezone)
    return pendulum.instance(instant, tz=pendulum.UTC).in_timezone(tz)


def format_in_zone(instant: datetime, timezone: str, pattern: str) -> str:
    """Render ``instant`` in ``timezone`` using pendulum format tokens."""
    return from_utc(instant, timezone).format(pattern)


def parse_local_time(time_of_day: str, date: Date, timezone: str) -> DateTime:
    """
    Combine a calendar date and an ``HH:mm`` time into an absolute instant.

    Args:
        time_of_day: Wall-clock time, e.g. ``"09:30"``
        date: Calendar date the time belongs to
        timezone: IANA timezone the wall-clock time is expressed in

    Returns:
        The equivalent instant in UTC

    Raises:
        InvalidTimeFormat: If ``time_of_day`` is not ``HH:mm``
        InvalidTimezone: If ``timezone`` is unknown
    """
    hour, minute = parse_time_of_day(time_of_day)
    wall = datetime(date.year, date.month, date.day, hour, minute)
    return to_utc(wall, timezone)
