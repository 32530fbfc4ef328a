from flask import Blueprint, current_app, request

from ..services.availability_service import AvailabilityEngine
from ..services.booking_service import BookingService
from ..services.common import _store, to_int_safe
from ..utils.constants import NAME_MAX_LEN, NAME_MIN_LEN
from ..utils.dates import parse_iso
from ..utils.responses import fail, ok

bp = Blueprint("bookings", __name__, url_prefix="/api/bookings")


def _tz() -> str:
    return current_app.config.get("APP_TIMEZONE", "UTC")


def _validate_name(errors, field, value, label):
    if value is not None and not isinstance(value, str):
        errors.append({"field": field, "message": f"{label} must be a string"})
        return ""
    value = (value or "").strip()
    if not value:
        errors.append({"field": field, "message": f"{label} is required"})
    elif not (NAME_MIN_LEN <= len(value) <= NAME_MAX_LEN):
        errors.append({"field": field,
                       "message": f"{label} must be between {NAME_MIN_LEN} and {NAME_MAX_LEN} characters"})
    return value


def _validate_date(errors, field, value, label):
    if value is None or not str(value).strip():
        errors.append({"field": field, "message": f"{label} is required"})
        return None
    try:
        return parse_iso(value, _tz())
    except (TypeError, ValueError):
        errors.append({"field": field, "message": f"{label} must be a valid ISO 8601 date"})
        return None


def _parse_booking_payload(payload: dict):
    """Return (fields, errors). Syntax only; interval rules belong to the engine."""
    errors = []
    first = _validate_name(errors, "firstName", payload.get("firstName"), "First name")
    last = _validate_name(errors, "lastName", payload.get("lastName"), "Last name")

    raw_vid = payload.get("vehicleId")
    vid = None
    if raw_vid is None or str(raw_vid).strip() == "":
        errors.append({"field": "vehicleId", "message": "Vehicle ID is required"})
    else:
        vid = to_int_safe(raw_vid)
        if vid is None or vid < 1:
            errors.append({"field": "vehicleId", "message": "Vehicle ID must be a valid positive integer"})

    start = _validate_date(errors, "startDate", payload.get("startDate"), "Start date")
    end = _validate_date(errors, "endDate", payload.get("endDate"), "End date")

    fields = dict(first_name=first, last_name=last, vehicle_id=vid, start=start, end=end)
    return fields, errors


@bp.post("")
def create_booking():
    """Confirm a booking; the engine enforces interval, past-date and overlap rules."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return fail("Validation failed", 400, errors=[{"field": "body", "message": "JSON object body is required"}])

    fields, errors = _parse_booking_payload(payload)
    if errors:
        return fail("Validation failed", 400, errors=errors)

    booking = AvailabilityEngine(_store()).create_booking(**fields)
    return ok(booking.to_dict(), "Booking created successfully", 201)


@bp.get("")
def list_bookings():
    bookings = BookingService(_store()).list_bookings()
    return ok([b.to_dict() for b in bookings], "Bookings fetched successfully")


@bp.get("/<booking_id>")
def get_booking(booking_id):
    bid = to_int_safe(booking_id)
    if bid is None:
        return fail("Valid booking ID is required", 400)
    booking = BookingService(_store()).get_booking(bid)
    return ok(booking.to_dict(), "Booking fetched successfully")


@bp.get("/availability/check")
def check_availability():
    """Non-binding availability answer for the date step of the wizard."""
    q = {k: (request.args.get(k) or "").strip() for k in ("vehicleId", "startDate", "endDate")}
    if not all(q.values()):
        return fail("Vehicle ID, start date, and end date are required", 400)

    vid = to_int_safe(q["vehicleId"])
    if vid is None or vid < 1:
        return fail("Vehicle ID must be a valid positive integer", 400)
    try:
        start = parse_iso(q["startDate"], _tz())
        end = parse_iso(q["endDate"], _tz())
    except ValueError:
        return fail("Start date and end date must be valid ISO 8601 dates", 400)

    result = AvailabilityEngine(_store()).check_availability(vid, start, end)
    return ok(result.to_dict(), "Availability checked successfully")
