"""Month and sport filtering of normalized tournaments."""

from __future__ import annotations

from typing import Iterable

from tournament_calendar import InvalidTimestamp, Sport, Tournament
from tournament_calendar.calendar_grid import normalize_month
from tournament_calendar.timekey import month_key as to_month_key

ALL_SPORTS = "ALL"

SportSelector = int | str


def parse_sport_selector(value: str | int | None) -> SportSelector:
    """Turn a raw sport query value into a sport id or ``ALL_SPORTS``."""
    if value is None or isinstance(value, bool):
        return ALL_SPORTS
    if isinstance(value, int):
        return value

    text = str(value).strip()
    if not text or text.upper() == ALL_SPORTS:
        return ALL_SPORTS
    if text.isdecimal():
        return int(text)
    raise ValueError(f"Invalid sport selector: {value!r}")


def parse_filters(
    month: str | None = None, sport: str | int | None = None
) -> tuple[str | None, SportSelector]:
    """Validate raw query values into ``(month_key, sport_id)``.

    Raises ``InvalidMonth`` for an unrecognised month and ``ValueError`` for a
    non-numeric sport selector.
    """
    month_key = normalize_month(month) if month else None
    return month_key, parse_sport_selector(sport)


def _starts_in_month(tournament: Tournament, month_key: str) -> bool:
    try:
        return to_month_key(tournament.start_timestamp) == month_key
    except InvalidTimestamp:
        return False


def filter_tournaments(
    tournaments: Iterable[Tournament],
    month_key: str | None = None,
    sport_id: SportSelector = ALL_SPORTS,
) -> list[Tournament]:
    """Keep tournaments of ``sport_id`` that start in ``month_key`` (IST).

    Both constraints are optional. Input order is preserved, and tournaments
    with an unparseable start date never match a month.
    """
    filter_sport = sport_id is not None and sport_id != ALL_SPORTS

    result: list[Tournament] = []
    for tournament in tournaments:
        if filter_sport and tournament.sport_id != sport_id:
            continue
        if month_key and not _starts_in_month(tournament, month_key):
            continue
        result.append(tournament)
    return result


def sport_options(sports: Iterable[Sport] | None) -> list[dict]:
    """Options for a sport picker: "All Sports" first, then by name."""
    options = [{"id": ALL_SPORTS, "label": "All Sports", "code": ALL_SPORTS}]
    for sport in sorted(sports or [], key=lambda s: s.display_name.lower()):
        options.append({"id": sport.id, "label": sport.display_name, "code": sport.code})
    return options
