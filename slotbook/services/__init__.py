"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .availability import AvailabilityService, AvailableSlot, BookingSourceProtocol
from .embed import EmbedLinks
from .messaging import BookingCompleted, CloseRequested, MessageChannel, parse_message

__all__ = [
    "AvailabilityService",
    "AvailableSlot",
    "BookingCompleted",
    "BookingSourceProtocol",
    "CloseRequested",
    "EmbedLinks",
    "MessageChannel",
    "parse_message",
]
