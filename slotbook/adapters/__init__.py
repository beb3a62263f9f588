"""
Adapters layer - External booking data.
"""

from .json_booking_source import JsonBookingSource
from .memory_booking_source import InMemoryBookingSource

__all__ = ["JsonBookingSource", "InMemoryBookingSource"]
