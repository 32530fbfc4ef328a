"""Shared service helpers."""

from datetime import datetime, timezone

from flask import current_app

from ..models.store import Store

STORE_KEY = "booking_store"


def _store() -> Store:
    """Get the store bound to the running app."""
    return current_app.extensions[STORE_KEY]


def _now() -> datetime:
    """Wrapper for easier testing/mocking."""
    return datetime.now(timezone.utc)


def to_int_safe(value):
    """Safely convert to int; return None if invalid."""
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None
