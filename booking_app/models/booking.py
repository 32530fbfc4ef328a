from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..utils.constants import BookingStatus
from ..utils.dates import iso
from .vehicle import Vehicle


def overlap(a_start, a_end, b_start, b_end) -> bool:
    """
    Check overlap between [a_start, a_end) and [b_start, b_end).
    End is exclusive: a booking ending at 2025-06-05 and one starting at
    2025-06-05 are back-to-back and do not overlap.
    Overlap rule: a_start < b_end and b_start < a_end
    """
    return a_start < b_end and b_start < a_end


@dataclass(frozen=True)
class Interval:
    """Half-open time range [start, end). Well-formedness is checked by the caller."""
    start: datetime
    end: datetime

    def overlaps(self, other: "Interval") -> bool:
        return overlap(self.start, self.end, other.start, other.end)

    @property
    def is_valid(self) -> bool:
        return self.start < self.end


@dataclass(frozen=True)
class Customer:
    first_name: str
    last_name: str


@dataclass
class Booking:
    id: int
    first_name: str
    last_name: str
    vehicle_id: int
    start_date: datetime
    end_date: datetime
    status: BookingStatus = BookingStatus.CONFIRMED
    created_at: Optional[datetime] = None
    vehicle: Optional[Vehicle] = None

    @property
    def interval(self) -> Interval:
        return Interval(self.start_date, self.end_date)

    def to_dict(self) -> dict:
        d = {
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "vehicleId": self.vehicle_id,
            "startDate": iso(self.start_date),
            "endDate": iso(self.end_date),
            "status": self.status.value,
            "createdAt": iso(self.created_at),
        }
        if self.vehicle is not None:
            d["vehicle"] = self.vehicle.to_dict()
        return d


@dataclass
class BookingConflict:
    """Returned by the store instead of a Booking when the check-and-insert found overlaps."""
    conflicting_bookings: list = field(default_factory=list)


@dataclass
class AvailabilityResult:
    is_available: bool
    conflicting_bookings: list = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "isAvailable": self.is_available,
            "conflictingBookings": [b.to_dict() for b in self.conflicting_bookings],
        }
