"""Date parsing and timezone helpers."""
from datetime import datetime, date, timezone

import pytz


def parse_iso(value, tz_name: str = "UTC") -> datetime:
    """
    Parse an ISO-8601 string into an aware UTC datetime.
    Supports:
      - 'YYYY-MM-DD'
      - 'YYYY-MM-DDTHH:MM' / 'YYYY-MM-DDTHH:MM:SS' (fractional seconds allowed)
      - 'YYYY-MM-DD HH:MM:SS'
      - Above with 'Z' or timezone offsets like '+02:00'
    Values without an offset are read as wall-clock time in `tz_name`.
    Raises ValueError on anything else.
    """
    if value is None:
        raise ValueError("Missing date")

    s = str(value).strip()
    if not s:
        raise ValueError("Missing date")

    # Normalize trailing 'Z' so fromisoformat accepts it on every Python 3
    if s.endswith("Z") or s.endswith("z"):
        s = s[:-1] + "+00:00"

    if "T" not in s and " " not in s:
        # Date-only
        dt = datetime.strptime(s, "%Y-%m-%d")
    else:
        dt = datetime.fromisoformat(s)

    try:
        if dt.tzinfo is None:
            # pytz zones must be attached with localize(), not replace()
            dt = pytz.timezone(tz_name).localize(dt)
        return dt.astimezone(timezone.utc)
    except OverflowError as e:
        # e.g. 9999-12-31T23:00-05:00 lands past datetime.max in UTC
        raise ValueError(f"Date out of range: {s!r}") from e


def as_utc(value) -> datetime:
    """Coerce a date/datetime to an aware UTC datetime (naive values are taken as UTC)."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    raise TypeError(f"Unsupported date: {value!r}")


def to_naive_utc(value: datetime) -> datetime:
    """Strip tzinfo after converting to UTC; the database stores naive UTC."""
    return as_utc(value).replace(tzinfo=None)


def iso(value) -> str | None:
    """Serialize a datetime as ISO-8601 with a 'Z' suffix for UTC."""
    if value is None:
        return None
    return as_utc(value).isoformat().replace("+00:00", "Z")


def valid_timezone(tz_name: str) -> bool:
    try:
        pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        return False
    return True
