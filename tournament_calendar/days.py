"""Per-day aggregation of tournaments for calendar highlighting."""

from __future__ import annotations

from typing import Iterable

from tournament_calendar import InvalidTimestamp, Tournament
from tournament_calendar.timekey import day_key


def _start_day(tournament: Tournament) -> str | None:
    try:
        return day_key(tournament.start_timestamp)
    except InvalidTimestamp:
        return None


def highlighted_days(tournaments: Iterable[Tournament]) -> set[str]:
    """Day keys on which at least one tournament starts."""
    days = set()
    for tournament in tournaments:
        key = _start_day(tournament)
        if key is not None:
            days.add(key)
    return days


def by_day(tournaments: Iterable[Tournament], selected_day: str | None) -> list[Tournament]:
    """Tournaments starting on ``selected_day``, or all of them when unset."""
    if selected_day is None:
        return list(tournaments)
    return [t for t in tournaments if _start_day(t) == selected_day]


def select_day(current: str | None, day: str | None) -> str | None:
    """Next selected day after clicking ``day``; clicking it again clears it."""
    if not day:
        return None
    return None if current == day else day
