"""
Custom exception classes for the vehicle booking API.

Every error carries a stable ``kind`` tag so the HTTP layer can pick a status
code without knowing about the storage technology underneath.
"""


class BookingError(Exception):
    """Base class for all booking core errors."""

    kind = "error"
    default_message = "Error: booking request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover
        return self.message


class InvalidIntervalError(BookingError):
    """Raised when the start date is not strictly before the end date."""

    kind = "invalid_interval"
    default_message = "End date must be after start date"


class PastDateError(BookingError):
    """Raised when a booking would start before the current moment."""

    kind = "past_date"
    default_message = "Start date cannot be in the past"


class NotFoundError(BookingError):
    kind = "not_found"
    default_message = "Record not found"


class VehicleNotFoundError(NotFoundError):
    """Raised when a vehicle ID cannot be found in the catalog."""

    default_message = "Vehicle not found"


class BookingNotFoundError(NotFoundError):
    """Raised when a booking ID cannot be found."""

    default_message = "Booking not found"


class AvailabilityConflictError(BookingError):
    """Raised when the requested dates overlap a confirmed booking."""

    kind = "conflict"
    default_message = "Vehicle is not available for the selected dates"

    def __init__(self, message: str | None = None, conflicting_bookings=None) -> None:
        self.conflicting_bookings = list(conflicting_bookings or [])
        super().__init__(message)


class StorageError(BookingError):
    """Raised when the persistence layer fails; never retried by the core."""

    kind = "storage"
    default_message = "Error: storage operation failed"
