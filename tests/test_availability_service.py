"""
Tests for the AvailabilityService orchestration layer.
"""

from datetime import date
from typing import List

import pendulum
import pytest

from slotbook.adapters.memory_booking_source import InMemoryBookingSource
from slotbook.config import SchedulingConfig
from slotbook.domain.exceptions import InvalidTimezone
from slotbook.domain.models import BookedInterval
from slotbook.services.availability import AvailabilityService, AvailableSlot

NOW = pendulum.datetime(2024, 6, 1, 12, 0, tz="UTC")
TZ = "America/Mexico_City"


class StubBookingSource:
    """Minimal stub matching BookingSourceProtocol."""

    def __init__(self, bookings: List[BookedInterval]):
        self._bookings = bookings
        self.calls = []

    def get_bookings(self, start, end):
        self.calls.append((start, end))
        return self._bookings


def _build_service(bookings=None, **scheduling) -> AvailabilityService:
    settings = {"start_time": "09:00", "end_time": "11:00", "duration_minutes": 30}
    settings.update(scheduling)
    return AvailabilityService(
        booking_source=StubBookingSource(bookings or []),
        scheduling=SchedulingConfig(**settings),
        timezone=TZ,
    )


def test_find_slots_skips_booked_time():
    """A booked half hour is missing from the result."""
    bookings = [
        BookedInterval(
            start_time=pendulum.datetime(2024, 6, 3, 15, 30, tz="UTC"),
            end_time=pendulum.datetime(2024, 6, 3, 16, 0, tz="UTC"),
        )
    ]
    service = _build_service(bookings)

    slots = service.find_slots(date=date(2024, 6, 3), now=NOW)

    assert slots == [
        AvailableSlot(time="09:00", datetime="2024-06-03T15:00:00Z"),
        AvailableSlot(time="10:00", datetime="2024-06-03T16:00:00Z"),
        AvailableSlot(time="10:30", datetime="2024-06-03T16:30:00Z"),
    ]


def test_find_slots_in_visitor_timezone():
    """Times are rendered for the visitor, instants stay in UTC."""
    service = _build_service()

    slots = service.find_slots(date=date(2024, 6, 3), visitor_timezone="Europe/Madrid", now=NOW)

    assert [slot.time for slot in slots] == ["17:00", "17:30", "18:00", "18:30"]
    assert slots[0].datetime == "2024-06-03T15:00:00Z"


def test_fetches_the_host_local_day():
    """Bookings are looked up for the whole host-local day."""
    service = _build_service()

    service.find_slots(date=date(2024, 6, 3), now=NOW)

    source = service._booking_source
    assert source.calls == [
        (
            pendulum.datetime(2024, 6, 3, 6, 0, tz="UTC"),
            pendulum.datetime(2024, 6, 4, 6, 0, tz="UTC"),
        )
    ]


def test_min_notice_drops_early_slots():
    """Slots starting within the notice period are not offered."""
    service = _build_service(min_notice_minutes=60)
    now = pendulum.datetime(2024, 6, 3, 14, 30, tz="UTC")  # 08:30 local

    slots = service.find_slots(date=date(2024, 6, 3), now=now)

    assert [slot.time for slot in slots] == ["09:30", "10:00", "10:30"]


@pytest.mark.parametrize("day", [date(2024, 5, 31), date(2024, 9, 1)])
def test_dates_outside_horizon(day):
    """Past dates and dates beyond the horizon yield nothing."""
    service = _build_service(max_days_in_advance=60)

    assert service.find_slots(date=day, now=NOW) == []
    assert service._booking_source.calls == []


def test_check_slot_applies_buffers():
    """A slot right after a booking clashes once a buffer is configured."""
    bookings = [
        BookedInterval(
            start_time=pendulum.datetime(2024, 6, 3, 15, 0, tz="UTC"),
            end_time=pendulum.datetime(2024, 6, 3, 15, 30, tz="UTC"),
        )
    ]
    start = pendulum.datetime(2024, 6, 3, 15, 30, tz="UTC")
    end = start.add(minutes=30)

    assert _build_service(bookings).check_slot(start, end)
    assert not _build_service(bookings, buffer_before=10).check_slot(start, end)


def test_invalid_timezones():
    with pytest.raises(InvalidTimezone):
        AvailabilityService(StubBookingSource([]), SchedulingConfig(), timezone="Nowhere/Land")

    with pytest.raises(InvalidTimezone):
        _build_service().find_slots(date=date(2024, 6, 3), visitor_timezone="Nowhere/Land", now=NOW)


def _build_utc_service(bookings, **scheduling) -> AvailabilityService:
    return AvailabilityService(
        booking_source=InMemoryBookingSource(bookings),
        scheduling=SchedulingConfig(duration_minutes=30, **scheduling),
        timezone="UTC",
    )


def test_trailing_buffer_sees_bookings_after_midnight():
    """A late slot whose buffer runs into the next day is not offered."""
    bookings = [
        BookedInterval(
            start_time=pendulum.datetime(2024, 6, 4, 0, 5, tz="UTC"),
            end_time=pendulum.datetime(2024, 6, 4, 0, 40, tz="UTC"),
        )
    ]
    service = _build_utc_service(bookings, start_time="23:00", end_time="23:30", buffer_after=45)
    start = pendulum.datetime(2024, 6, 3, 23, 0, tz="UTC")

    assert service.find_slots(date=date(2024, 6, 3), now=NOW) == []
    assert not service.check_slot(start, start.add(minutes=30))


def test_leading_buffer_sees_bookings_before_midnight():
    """An early slot whose buffer reaches into the previous day is not offered."""
    bookings = [
        BookedInterval(
            start_time=pendulum.datetime(2024, 6, 2, 23, 45, tz="UTC"),
            end_time=pendulum.datetime(2024, 6, 2, 23, 55, tz="UTC"),
        )
    ]
    service = _build_utc_service(bookings, start_time="00:00", end_time="00:30", buffer_before=15)
    start = pendulum.datetime(2024, 6, 3, 0, 0, tz="UTC")

    assert service.find_slots(date=date(2024, 6, 3), now=NOW) == []
    assert not service.check_slot(start, start.add(minutes=30))


def test_day_lookup_is_widened_by_buffers():
    """The booking lookup covers the buffers on both ends of the day."""
    service = _build_service(buffer_before=15, buffer_after=45)

    service.fetch_day_bookings(date(2024, 6, 3))

    assert service._booking_source.calls == [
        (
            pendulum.datetime(2024, 6, 3, 5, 45, tz="UTC"),
            pendulum.datetime(2024, 6, 4, 6, 45, tz="UTC"),
        )
    ]
