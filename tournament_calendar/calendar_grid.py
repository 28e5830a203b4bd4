"""Month keys and the fixed 6-week calendar grid."""

from __future__ import annotations

import re
from datetime import MAXYEAR, MINYEAR, date, datetime, timedelta

from tournament_calendar import CalendarCell, InvalidMonth
from tournament_calendar.timekey import day_key_from_date

TOTAL_CELLS = 42
WEEKDAY_HEADERS = ["M", "T", "W", "T", "F", "S", "S"]

_MONTH_KEY_RE = re.compile(r"^(\d{4})-(\d{2})$")
_MONTH_NAME_FORMATS = ("%B %Y", "%b %Y", "%Y %B", "%Y %b")


def parse_month_key(month_key: str) -> tuple[int, int]:
    """Split a ``YYYY-MM`` key into ``(year, month)``."""
    match = _MONTH_KEY_RE.match(month_key) if isinstance(month_key, str) else None
    if not match:
        raise InvalidMonth(f"Invalid month value: {month_key!r}")

    year, month = int(match.group(1)), int(match.group(2))
    if year < 1 or not 1 <= month <= 12:
        raise InvalidMonth(f"Month out of range: {month_key!r}")
    return year, month


def normalize_month(value: str) -> str:
    """Normalize a month selector (``2025-08``, ``August 2025``, ``Aug 2025``)."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidMonth(f"Invalid month value: {value!r}")

    text = " ".join(value.split())
    if _MONTH_KEY_RE.match(text):
        year, month = parse_month_key(text)
        return f"{year:04d}-{month:02d}"

    for fmt in _MONTH_NAME_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError:
            continue
        return parsed.strftime("%Y-%m")

    raise InvalidMonth(f"Invalid month value: {value!r}")


def month_label(month_key: str) -> str:
    """Short label for a month key, e.g. ``"Aug 2025"``."""
    year, month = parse_month_key(month_key)
    return date(year, month, 1).strftime("%b %Y")


def shift_month(month_key: str, delta: int) -> str:
    """Month key ``delta`` months after (or before) ``month_key``."""
    year, month = parse_month_key(month_key)
    index = year * 12 + (month - 1) + delta
    if not MINYEAR <= index // 12 <= MAXYEAR:
        raise InvalidMonth(f"Month out of range: {month_key!r} shifted by {delta}")
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


def build_grid(month_key: str) -> list[CalendarCell]:
    """Build the 42-cell, Monday-first grid for a month.

    The grid always spans six full weeks, starting on the Monday on or before
    the 1st of the month. Cells outside the month are included with
    ``in_target_month=False``.
    """
    year, month = parse_month_key(month_key)
    first_of_month = date(year, month, 1)
    # isoweekday() is 1 for Monday; the Sunday-based index is isoweekday() % 7
    offset = (first_of_month.isoweekday() % 7 + 6) % 7

    try:
        last_cell = first_of_month + timedelta(days=TOTAL_CELLS - 1 - offset)
    except OverflowError as e:
        raise InvalidMonth(f"Month grid out of range: {month_key!r}") from e

    cells: list[CalendarCell] = []
    for index in range(TOTAL_CELLS):
        current = last_cell - timedelta(days=TOTAL_CELLS - 1 - index)
        cells.append(CalendarCell(
            day_key=day_key_from_date(current),
            label=str(current.day),
            in_target_month=current.month == month,
        ))

    return cells
