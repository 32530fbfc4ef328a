"""Availability checks and conflict-safe booking creation."""

import logging
from typing import Callable, Optional

from ..exceptions import (
    AvailabilityConflictError,
    InvalidIntervalError,
    PastDateError,
    VehicleNotFoundError,
)
from ..models.booking import AvailabilityResult, Booking, BookingConflict, Customer, Interval
from ..models.store import Store
from ..utils.dates import as_utc
from .common import _now

logger = logging.getLogger(__name__)


class AvailabilityEngine:
    """
    Decides whether a vehicle is free for a half-open interval and creates
    bookings without ever letting two confirmed ones overlap.

    The store is passed in explicitly; `clock` returns an aware datetime and
    defaults to the current UTC time.
    """

    def __init__(self, store: Store, clock: Optional[Callable] = None):
        self.store = store
        self.clock = clock or _now

    @staticmethod
    def _interval(start, end) -> Interval:
        interval = Interval(as_utc(start), as_utc(end))
        if not interval.is_valid:
            raise InvalidIntervalError()
        return interval

    def check_availability(self, vehicle_id: int, start, end) -> AvailabilityResult:
        """
        Non-binding read: a booking created right after this returns can
        invalidate the answer. Use create_booking for a guarantee.
        """
        interval = self._interval(start, end)
        if not self.store.vehicle_exists(vehicle_id):
            raise VehicleNotFoundError(f"Vehicle with ID '{vehicle_id}' not found")

        conflicts = [b for b in self.store.find_confirmed_bookings(vehicle_id) if interval.overlaps(b.interval)]
        return AvailabilityResult(is_available=not conflicts, conflicting_bookings=conflicts)

    def create_booking(self, first_name: str, last_name: str, vehicle_id: int, start, end) -> Booking:
        """
        Create a confirmed booking if the interval is free.

        Raises InvalidIntervalError, PastDateError, VehicleNotFoundError or
        AvailabilityConflictError; StorageError comes through from the store.
        Nothing is retried here.
        """
        interval = self._interval(start, end)
        if interval.start < as_utc(self.clock()):
            raise PastDateError()
        if not self.store.vehicle_exists(vehicle_id):
            raise VehicleNotFoundError(f"Vehicle with ID '{vehicle_id}' not found")

        result = self.store.insert_booking_if_no_conflict(
            vehicle_id, interval, Customer(first_name=first_name, last_name=last_name)
        )
        if result is None:
            # Vehicle vanished between the existence check and the lock
            raise VehicleNotFoundError(f"Vehicle with ID '{vehicle_id}' not found")
        if isinstance(result, BookingConflict):
            raise AvailabilityConflictError(conflicting_bookings=result.conflicting_bookings)

        logger.info("Booking %s confirmed for vehicle %s", result.id, vehicle_id)
        return result
