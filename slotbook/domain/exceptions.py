"""
Domain-specific exception hierarchy for slotbook.
"""


class SlotbookError(Exception):
    """Base class for all application-level errors."""


class InvalidTimeFormat(SlotbookError):
    """Raised when a time-of-day string does not match ``HH:mm``."""


class InvalidDate(SlotbookError):
    """Raised when a calendar date string does not match ``YYYY-MM-DD``."""


class InvalidTimezone(SlotbookError):
    """Raised when a timezone identifier is not recognised."""


class InvalidDuration(SlotbookError):
    """Raised when a slot duration or buffer is out of range."""


class InvalidBookingRecord(SlotbookError):
    """Raised when a booking record cannot be turned into an interval."""


class BookingSourceError(SlotbookError):
    """Raised when booking data cannot be loaded or parsed."""
