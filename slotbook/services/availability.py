"""
Application service for listing a host's bookable slots.

The service fetches existing bookings through a booking source adapter and
delegates the slot arithmetic to the domain-level ``slot_engine``. Keeping
the source behind a small protocol lets tests plug in an in-memory stub.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date as Date
from datetime import datetime
from typing import List, Optional, Protocol

import pendulum
from pendulum import DateTime

from ..config import SchedulingConfig
from ..domain.models import BookedInterval, Slot
from ..domain.slot_engine import available_slots, is_available
from ..domain.timezone import format_in_zone, from_utc, get_timezone, parse_local_time

logger = logging.getLogger(__name__)


class BookingSourceProtocol(Protocol):
    """Protocol describing the booking lookup needed by the service."""

    def get_bookings(self, start: DateTime, end: DateTime) -> List[BookedInterval]:
        """Return bookings touching the inclusive range ``[start, end]``."""


@dataclass(frozen=True)
class AvailableSlot:
    """A free slot as handed to the booking page."""
    time: str  # HH:mm in the visitor's timezone
    datetime: str  # ISO-8601 UTC start

    @classmethod
    def from_slot(cls, slot: Slot, visitor_timezone: str) -> "AvailableSlot":
        return cls(
            time=format_in_zone(slot.start, visitor_timezone, "HH:mm"),
            datetime=slot.start.to_iso8601_string(),
        )


class AvailabilityService:
    """
    Lists free slots for one host on a given date.

    The host's working window, slot duration, buffers, minimum notice and
    booking horizon come from ``SchedulingConfig``.
    """

    def __init__(
        self,
        booking_source: BookingSourceProtocol,
        scheduling: SchedulingConfig,
        timezone: str,
    ) -> None:
        get_timezone(timezone)
        self._booking_source = booking_source
        self._scheduling = scheduling
        self._timezone = timezone

    def find_slots(
        self,
        *,
        date: Date,
        visitor_timezone: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> List[AvailableSlot]:
        """
        Compute the free slots of ``date`` (a host-local calendar date).

        Dates in the past or beyond the booking horizon yield no slots.
        """
        visitor_tz = visitor_timezone or self._timezone
        get_timezone(visitor_tz)
        current = pendulum.instance(now, tz=pendulum.UTC) if now else pendulum.now("UTC")

        if not self._within_horizon(date, current):
            logger.debug("Date %s is outside the booking horizon", date)
            return []

        slots = self.calculate_slots(
            date=date,
            bookings=self.fetch_day_bookings(date),
            not_before=current.add(minutes=self._scheduling.min_notice_minutes),
        )

        return [AvailableSlot.from_slot(slot, visitor_tz) for slot in slots]

    def calculate_slots(
        self,
        *,
        date: Date,
        bookings: List[BookedInterval],
        not_before: Optional[datetime] = None,
    ) -> List[Slot]:
        """Calculate free slots from already fetched bookings."""
        scheduling = self._scheduling
        return available_slots(
            scheduling.start_time,
            scheduling.end_time,
            scheduling.duration_minutes,
            date,
            self._timezone,
            bookings,
            buffer_before=scheduling.buffer_before,
            buffer_after=scheduling.buffer_after,
            not_before=not_before,
        )

    def fetch_day_bookings(self, date: Date) -> List[BookedInterval]:
        """
        Fetch the bookings touching the host-local day ``date``.

        The range is widened by the buffers, since a padded slot can reach
        across midnight on either side.
        """
        day_start = parse_local_time("00:00", date, self._timezone).subtract(
            minutes=self._scheduling.buffer_before
        )
        next_day = pendulum.date(date.year, date.month, date.day).add(days=1)
        day_end = parse_local_time("00:00", next_day, self._timezone).add(
            minutes=self._scheduling.buffer_after
        )

        bookings = self._booking_source.get_bookings(day_start, day_end)
        logger.debug("Loaded %d booking(s) for %s", len(bookings), date)
        return bookings

    def check_slot(self, start: datetime, end: datetime) -> bool:
        """Check a single candidate interval, buffers included."""
        padded_start = pendulum.instance(start, tz=pendulum.UTC).subtract(
            minutes=self._scheduling.buffer_before
        )
        padded_end = pendulum.instance(end, tz=pendulum.UTC).add(
            minutes=self._scheduling.buffer_after
        )
        bookings = self._booking_source.get_bookings(padded_start, padded_end)
        return is_available(padded_start, padded_end, bookings)

    def _within_horizon(self, date: Date, now: DateTime) -> bool:
        today = from_utc(now, self._timezone).date()
        horizon = from_utc(
            now.add(days=self._scheduling.max_days_in_advance), self._timezone
        ).date()
        return today <= date <= horizon
