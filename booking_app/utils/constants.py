# booking_app/utils/constants.py

"""
Global constants for booking statuses, catalog values and input limits.
These constants are imported by models, services and controllers.
"""

from enum import Enum


class BookingStatus(str, Enum):
    CONFIRMED = "confirmed"
    # Reserved: no operation moves a booking here yet.
    CANCELLED = "cancelled"


# Only these statuses block a vehicle's calendar
BLOCKING_STATUSES = (BookingStatus.CONFIRMED,)

ALLOWED_WHEELS = {2, 4}

# --- Facade input limits ---
NAME_MIN_LEN = 2
NAME_MAX_LEN = 50

# Largest id a signed 64-bit INTEGER column can hold
MAX_DB_ID = 2**63 - 1
