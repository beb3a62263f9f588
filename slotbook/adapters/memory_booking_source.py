"""
In-memory booking source, used when no bookings file is configured.
"""

from typing import Iterable, List

from pendulum import DateTime

from ..domain.models import BookedInterval


class InMemoryBookingSource:
    """Serves a fixed list of bookings."""

    def __init__(self, bookings: Iterable[BookedInterval] = ()):
        self.bookings = list(bookings)

    def get_bookings(self, start: DateTime, end: DateTime) -> List[BookedInterval]:
        return [
            booked for booked in self.bookings
            if booked.start_time <= end and booked.end_time >= start
        ]
