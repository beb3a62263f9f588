"""
Booking source backed by a JSON file of booking records.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from pendulum import DateTime

from ..domain.exceptions import BookingSourceError, InvalidBookingRecord
from ..domain.models import BookedInterval

logger = logging.getLogger(__name__)

# Bookings in any other state no longer block their time.
BLOCKING_STATUSES = {"CONFIRMED", "PENDING_PAYMENT"}


class JsonBookingSource:
    """
    Loads bookings from a JSON file.

    The file holds a list of records shaped like the booking API output:
    ``{"startTime": "...Z", "endTime": "...Z", "status": "CONFIRMED"}``.
    Records without a status are treated as blocking.
    """

    def __init__(self, data_file: Path):
        """
        Initialize the source.

        Args:
            data_file: Path to the JSON file; a missing file means no bookings
        """
        self.data_file = data_file
        self.records = self._load_records()

    def _load_records(self) -> List[Dict[str, Any]]:
        """Load booking records from the JSON file."""
        if not self.data_file.exists():
            logger.warning("Bookings file %s not found; assuming no bookings", self.data_file)
            return []

        try:
            with open(self.data_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise BookingSourceError(f"Could not read bookings from {self.data_file}: {exc}") from exc

        if not isinstance(data, list):
            raise BookingSourceError(f"Bookings file {self.data_file} must contain a list of records")

        return data

    def get_bookings(self, start: DateTime, end: DateTime) -> List[BookedInterval]:
        """
        Return blocking bookings touching the inclusive range ``[start, end]``.

        Args:
            start: Start of the lookup window
            end: End of the lookup window

        Returns:
            List of BookedInterval objects in file order
        """
        bookings: List[BookedInterval] = []

        for record in self.records:
            if not isinstance(record, dict):
                logger.warning("Skipping non-object booking record: %r", record)
                continue

            status = record.get("status")
            if status is not None and str(status).upper() not in BLOCKING_STATUSES:
                continue

            try:
                booked = BookedInterval.from_record(record)
            except InvalidBookingRecord as exc:
                logger.warning("Skipping booking record: %s", exc)
                continue

            if booked.start_time <= end and booked.end_time >= start:
                bookings.append(booked)

        return bookings
