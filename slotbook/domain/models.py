"""
Domain models for slots, booked intervals and working windows.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping

import pendulum
from pendulum import DateTime

from .exceptions import InvalidBookingRecord, InvalidDuration
from .timezone import from_utc, parse_time_of_day


def _coerce_instant(value: Any) -> DateTime:
    """Turn an ISO-8601 string or datetime into a UTC instant."""
    if isinstance(value, datetime):
        return pendulum.instance(value, tz=pendulum.UTC).in_timezone("UTC")

    if isinstance(value, str):
        parsed = pendulum.parse(value)
        if isinstance(parsed, DateTime):
            return parsed.in_timezone("UTC")

    raise ValueError(f"Could not parse instant: {value!r}")


@dataclass(frozen=True)
class BookedInterval:
    """
    An existing reservation supplied by the booking source.

    Ordering of start and end is not enforced; degenerate intervals are
    accepted and still take part in the exact-start check.
    """
    start_time: DateTime
    end_time: DateTime

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "BookedInterval":
        """
        Build an interval from a ``{"startTime", "endTime"}`` record.

        Raises:
            InvalidBookingRecord: If a key is missing or a value can't be parsed
        """
        try:
            start = _coerce_instant(record["startTime"])
            end = _coerce_instant(record["endTime"])
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidBookingRecord(f"Invalid booking record {record!r}: {exc}") from exc

        return cls(start_time=start, end_time=end)

    def conflicts_with(self, start: datetime, end: datetime) -> bool:
        """
        Check whether the half-open candidate ``[start, end)`` clashes with this booking.

        Two candidates starting at the same instant always clash, even when
        one of them has no length.
        """
        if start < self.end_time and end > self.start_time:
            return True
        return start == self.start_time


@dataclass(frozen=True)
class Slot:
    """
    A candidate bookable interval.

    Invariant: duration_minutes is strictly positive.
    """
    start: DateTime
    duration_minutes: int

    def __post_init__(self):
        if self.duration_minutes <= 0:
            raise InvalidDuration(
                f"Slot duration must be positive, got {self.duration_minutes}"
            )

    @property
    def end(self) -> DateTime:
        return self.start.add(minutes=self.duration_minutes)

    def format_display(self, timezone: str) -> str:
        """
        Format the slot for display in ``timezone``.
        Format: Mon, DD.MM.YYYY | HH:mm - HH:mm (N min)
        """
        start = from_utc(self.start, timezone)
        end = from_utc(self.end, timezone)

        return (
            f"{start.format('ddd, DD.MM.YYYY')} | "
            f"{start.format('HH:mm')} - {end.format('HH:mm')} "
            f"({self.duration_minutes} min)"
        )


@dataclass(frozen=True)
class WorkingWindow:
    """Local start/end time-of-day bounding slot generation."""
    start_time: str
    end_time: str

    def __post_init__(self):
        parse_time_of_day(self.start_time)
        parse_time_of_day(self.end_time)

    def __str__(self) -> str:
        return f"{self.start_time} - {self.end_time}"
