"""Map booking error kinds to HTTP responses."""

import logging

from flask import current_app
from werkzeug.exceptions import HTTPException, NotFound

from ..exceptions import AvailabilityConflictError, BookingError
from ..utils.responses import fail

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    "invalid_interval": 400,
    "past_date": 400,
    "not_found": 404,
    "conflict": 409,
    "storage": 500,
}


def handle_booking_error(e: BookingError):
    status = STATUS_BY_KIND.get(e.kind, 500)
    if status >= 500:
        logger.exception("Unexpected %s error: %s", e.kind, e.message)
        detail = e.message if current_app.debug else None
        return fail("Internal Server Error", status, error=detail, kind=e.kind)

    conflicts = None
    if isinstance(e, AvailabilityConflictError):
        conflicts = [b.to_dict() for b in e.conflicting_bookings]
    return fail(e.message, status, kind=e.kind, conflictingBookings=conflicts)


def handle_not_found(e: NotFound):
    return fail("Route not found", 404)


def handle_http_error(e: HTTPException):
    return fail(e.description or e.name, e.code or 500)


def register_error_handlers(app):
    app.register_error_handler(BookingError, handle_booking_error)
    app.register_error_handler(NotFound, handle_not_found)
    app.register_error_handler(HTTPException, handle_http_error)
