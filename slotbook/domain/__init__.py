"""
Domain layer - Pure business logic without external dependencies.
"""

from .exceptions import (
    BookingSourceError,
    InvalidBookingRecord,
    InvalidDate,
    InvalidDuration,
    InvalidTimeFormat,
    InvalidTimezone,
    SlotbookError,
)
from .models import BookedInterval, Slot, WorkingWindow
from .slot_engine import available_slots, generate_slots, is_available
from .timezone import format_in_zone, from_utc, parse_local_time, to_utc

__all__ = [
    "BookedInterval",
    "BookingSourceError",
    "InvalidBookingRecord",
    "InvalidDate",
    "InvalidDuration",
    "InvalidTimeFormat",
    "InvalidTimezone",
    "Slot",
    "SlotbookError",
    "WorkingWindow",
    "available_slots",
    "format_in_zone",
    "from_utc",
    "generate_slots",
    "is_available",
    "parse_local_time",
    "to_utc",
]
