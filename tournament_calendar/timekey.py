"""Day and month keys plus display labels in the fixed display timezone (IST).

Upstream timestamps are stored and passed around exactly as received. They are
only projected into IST when a key or label is read from them, so no offset is
ever applied twice.
"""

from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo
from zoneinfo import ZoneInfo

from tournament_calendar import InvalidTimestamp

IST = ZoneInfo("Asia/Kolkata")

DAY_KEY_FORMAT = "%Y-%m-%d"
MONTH_KEY_FORMAT = "%Y-%m"
DATE_LABEL_FORMAT = "%d %b %Y"
TIME_LABEL_FORMAT = "%I:%M %p"


def to_canonical_instant(raw: str | datetime) -> datetime:
    """Parse an upstream timestamp into an aware UTC-based instant.

    Timestamps without a UTC marker or offset are read as UTC, e.g.
    ``"2025-08-15T10:00:00"`` is ``2025-08-15T10:00:00Z``. Naive datetimes
    are treated the same way.
    """
    if isinstance(raw, datetime):
        return raw if raw.tzinfo else raw.replace(tzinfo=timezone.utc)

    if not isinstance(raw, str) or not raw.strip():
        raise InvalidTimestamp(f"Invalid date value: {raw!r}")

    text = raw.strip()
    if text[-1] in ("Z", "z"):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise InvalidTimestamp(f"Invalid date value: {raw!r}") from e

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _project(value: str | datetime, tz: tzinfo) -> datetime:
    instant = to_canonical_instant(value)
    try:
        return instant.astimezone(tz)
    except OverflowError as e:
        raise InvalidTimestamp(f"Date out of range in {tz}: {value!r}") from e


def to_utc(value: str | datetime) -> datetime:
    """Canonical instant of ``value`` expressed in UTC."""
    return _project(value, timezone.utc)


def day_key(value: str | datetime, *, tz: tzinfo = IST) -> str:
    """Canonical ``YYYY-MM-DD`` key of the day ``value`` falls on in ``tz``."""
    return _project(value, tz).strftime(DAY_KEY_FORMAT)


def month_key(value: str | datetime, *, tz: tzinfo = IST) -> str:
    """Canonical ``YYYY-MM`` key of the month ``value`` falls in in ``tz``."""
    return _project(value, tz).strftime(MONTH_KEY_FORMAT)


def date_label(value: str | datetime, *, tz: tzinfo = IST) -> str:
    """Human date label, e.g. ``"12 Aug 2025"``."""
    return _project(value, tz).strftime(DATE_LABEL_FORMAT)


def time_label(value: str | datetime, *, tz: tzinfo = IST) -> str:
    """12-hour clock label, e.g. ``"03:30 PM"``."""
    return _project(value, tz).strftime(TIME_LABEL_FORMAT)


def range_label(start: str | datetime, end: str | datetime, *, tz: tzinfo = IST) -> str:
    """Date label for a span; a single label when both ends share a day."""
    start_label = date_label(start, tz=tz)
    end_label = date_label(end, tz=tz)
    if day_key(start, tz=tz) == day_key(end, tz=tz):
        return start_label
    return f"{start_label} - {end_label}"


def is_same_day(a: str | datetime, b: str | datetime, *, tz: tzinfo = IST) -> bool:
    return day_key(a, tz=tz) == day_key(b, tz=tz)


def day_key_from_date(day: date, *, tz: tzinfo = IST) -> str:
    """Day key of a calendar date, taken through its UTC-midnight instant."""
    midnight = datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
    return day_key(midnight, tz=tz)


def date_label_from_key(key: str) -> str:
    """Date label for a day key; malformed keys are returned unchanged."""
    try:
        day = datetime.strptime(key, DAY_KEY_FORMAT)
    except (TypeError, ValueError):
        return key
    return day.strftime(DATE_LABEL_FORMAT)
