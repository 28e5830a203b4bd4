"""JSON data payloads consumed by the static calendar front-end."""

from __future__ import annotations

from typing import Iterable

from tournament_calendar import InvalidTimestamp, Match, Sport, Tournament
from tournament_calendar.calendar_grid import WEEKDAY_HEADERS, build_grid, month_label
from tournament_calendar.days import by_day, highlighted_days
from tournament_calendar.filters import ALL_SPORTS, SportSelector, filter_tournaments, sport_options
from tournament_calendar.normalizer import title_case
from tournament_calendar.timekey import (
    date_label,
    date_label_from_key,
    range_label,
    time_label,
)


def _labels(primary: str | None, fallback: str) -> tuple[str | None, str | None]:
    """Date and time labels for ``primary``, else ``fallback``, else None."""
    for value in (primary, fallback):
        if not value:
            continue
        try:
            return date_label(value), time_label(value)
        except InvalidTimestamp:
            continue
    return None, None


def match_to_dict(match: Match, tournament: Tournament) -> dict:
    """Serialize a match; missing start times fall back to the tournament's."""
    date_str, time_str = _labels(match.start_timestamp, tournament.start_timestamp)
    return {
        "id": match.id,
        "stage": match.stage,
        "team_a": match.side_a,
        "team_b": match.side_b,
        "start_date": match.start_timestamp,
        "end_date": match.end_timestamp,
        "venue": match.venue,
        "status": match.status,
        "date_label": date_str,
        "time_label": time_str,
    }


def tournament_to_dict(tournament: Tournament) -> dict:
    try:
        dates = range_label(
            tournament.start_timestamp,
            tournament.end_timestamp or tournament.start_timestamp,
        )
    except InvalidTimestamp:
        dates = None

    return {
        "id": tournament.id,
        "name": tournament.name,
        "image_url": tournament.image_url,
        "level": tournament.level,
        "level_label": title_case(tournament.level),
        "start_date": tournament.start_timestamp,
        "end_date": tournament.end_timestamp,
        "sport_id": tournament.sport_id,
        "sport_name": tournament.sport_name,
        "dates_label": dates,
        "matches": [match_to_dict(m, tournament) for m in tournament.matches],
    }


def sport_to_dict(sport: Sport) -> dict:
    return {
        "id": sport.id,
        "code": sport.code,
        "short_label": sport.short_label,
        "name": sport.display_name,
    }


def generate_month_payload(
    month_key: str,
    tournaments: Iterable[Tournament],
    sport_id: SportSelector = ALL_SPORTS,
    generated_utc: str = "",
) -> dict:
    """Build the data file for one month and sport selection.

    Output format:
    {
        "month": {"value": "2025-08", "label": "Aug 2025"},
        "sport_id": "ALL" | int,
        "weekdays": ["M", ...],
        "grid": [{"day_key", "label", "in_month", "highlighted"}, ...],  # 42 cells
        "highlighted_days": ["2025-08-15", ...],
        "days": [{"day_key", "label", "tournament_ids": [...]}, ...],
        "tournaments": [...],
        "generated_utc": "..."
    }
    """
    selected = filter_tournaments(tournaments, month_key=month_key, sport_id=sport_id)
    highlighted = highlighted_days(selected)

    grid = [
        {
            "day_key": cell.day_key,
            "label": cell.label,
            "in_month": cell.in_target_month,
            "highlighted": cell.day_key in highlighted,
        }
        for cell in build_grid(month_key)
    ]

    days = [
        {
            "day_key": key,
            "label": date_label_from_key(key),
            "tournament_ids": [t.id for t in by_day(selected, key)],
        }
        for key in sorted(highlighted)
    ]

    return {
        "month": {"value": month_key, "label": month_label(month_key)},
        "sport_id": sport_id,
        "weekdays": list(WEEKDAY_HEADERS),
        "grid": grid,
        "highlighted_days": sorted(highlighted),
        "days": days,
        "tournaments": [tournament_to_dict(t) for t in selected],
        "generated_utc": generated_utc,
    }


def generate_manifest(
    months: list[str], sports: Iterable[Sport], generated_utc: str = ""
) -> dict:
    """Index of published months and sport options."""
    sports = list(sports)
    return {
        "months": [{"value": m, "label": month_label(m)} for m in months],
        "sport_options": sport_options(sports),
        "sports": [sport_to_dict(s) for s in sports],
        "generated_utc": generated_utc,
    }
