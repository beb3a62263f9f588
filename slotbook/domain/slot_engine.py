"""
Core slot logic: enumerate bookable slots and check them against bookings.

Pure domain logic without any external dependencies (no API calls, no
database, no I/O). Every function only reads its arguments and returns
freshly built values.
"""

from datetime import date as Date
from datetime import datetime
from typing import Iterable, List, Optional

from pendulum import DateTime

from .exceptions import InvalidDuration
from .models import BookedInterval, Slot
from .timezone import parse_local_time


def _validate_minutes(value: int, name: str, allow_zero: bool = False) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidDuration(f"{name} must be an integer number of minutes, got {value!r}")
    if value < 0 or (value == 0 and not allow_zero):
        qualifier = "non-negative" if allow_zero else "positive"
        raise InvalidDuration(f"{name} must be {qualifier}, got {value}")


def generate_slots(
    start_time: str,
    end_time: str,
    duration: int,
    date: Date,
    timezone: str,
) -> List[DateTime]:
    """
    Enumerate slot start instants within a working window.

    Args:
        start_time: Local window start (``HH:mm``)
        end_time: Local window end (``HH:mm``)
        duration: Slot length in minutes
        date: Calendar date of the window
        timezone: IANA timezone the window is expressed in

    Returns:
        Ordered list of UTC instants. A slot is kept only if it ends no later
        than the window end. An empty or inverted window yields ``[]``.

    Raises:
        InvalidDuration: If ``duration`` is not a positive integer
        InvalidTimeFormat: If a boundary is not ``HH:mm``
        InvalidTimezone: If ``timezone`` is unknown
    """
    _validate_minutes(duration, "duration")

    window_start = parse_local_time(start_time, date, timezone)
    window_end = parse_local_time(end_time, date, timezone)

    slots: List[DateTime] = []
    current = window_start

    while current.add(minutes=duration) <= window_end:
        slots.append(current)
        current = current.add(minutes=duration)

    return slots


def is_available(
    slot_start: datetime,
    slot_end: datetime,
    booked_intervals: Iterable[BookedInterval],
) -> bool:
    """
    Check a candidate ``[slot_start, slot_end)`` against existing bookings.

    Stops at the first conflict. The caller decides which bookings are
    relevant; no date filtering happens here.
    """
    for booked in booked_intervals:
        if booked.conflicts_with(slot_start, slot_end):
            return False
    return True


def available_slots(
    start_time: str,
    end_time: str,
    duration: int,
    date: Date,
    timezone: str,
    booked_intervals: Iterable[BookedInterval],
    buffer_before: int = 0,
    buffer_after: int = 0,
    not_before: Optional[datetime] = None,
) -> List[Slot]:
    """
    Generate slots for a window and keep the ones that are still free.

    Buffers widen each candidate on both sides before the conflict check,
    so a booking needs breathing room around it. Slots starting before
    ``not_before`` (minimum notice) are dropped.
    """
    _validate_minutes(buffer_before, "buffer_before", allow_zero=True)
    _validate_minutes(buffer_after, "buffer_after", allow_zero=True)

    starts = generate_slots(start_time, end_time, duration, date, timezone)
    bookings = list(booked_intervals)

    free: List[Slot] = []
    for start in starts:
        if not_before is not None and start < not_before:
            continue

        slot = Slot(start=start, duration_minutes=duration)
        padded_start = slot.start.subtract(minutes=buffer_before)
        padded_end = slot.end.add(minutes=buffer_after)

        if is_available(padded_start, padded_end, bookings):
            free.append(slot)

    return free
