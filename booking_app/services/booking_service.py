from __future__ import annotations

from ..exceptions import BookingNotFoundError
from ..models.booking import Booking
from ..models.store import Store


class BookingService:
    """Booking lookups for the confirmation step and listings."""

    def __init__(self, store: Store):
        self.store = store

    def list_bookings(self) -> list[Booking]:
        return self.store.list_bookings()

    def get_booking(self, booking_id: int) -> Booking:
        b = self.store.get_booking(booking_id)
        if b is None:
            raise BookingNotFoundError()
        return b
