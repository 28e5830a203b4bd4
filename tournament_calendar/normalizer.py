"""Normalization of raw StapuBox feed records into the shared models.

Raw records look like:

    sport:  {"sport_id", "sport_code", "sport_name"}
    group:  {"sport_id", "sport_name", "tournaments": [...] | null}
    tournament: {"id", "name", "tournament_img_url", "level",
                 "start_date", "end_date", "matches": [...] | null}
    match:  {"id", "stage", "team_a", "team_b",
             "start_date", "end_date" | null, "venue", "status"}

Only identity fields are required. Everything else is optional and becomes an
empty string (or ``None`` for match timestamps) when missing.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from tournament_calendar import MalformedRecord, Match, Sport, Tournament


def title_case(value: str | None) -> str:
    """Title-case each whitespace-separated token, e.g. ``"TABLE tennis"``."""
    if not value:
        return ""
    return " ".join(token[0].upper() + token[1:].lower() for token in str(value).split())


def _require_id(remote: Mapping[str, Any], key: str) -> int:
    value = remote.get(key) if isinstance(remote, Mapping) else None
    # bool is an int subclass but never a valid identity
    if not isinstance(value, int) or isinstance(value, bool):
        raise MalformedRecord(f"Record is missing integer '{key}': {remote!r}")
    return value


def _text(remote: Mapping[str, Any], key: str) -> str:
    value = remote.get(key)
    return "" if value is None else str(value)


def _optional_text(remote: Mapping[str, Any], key: str) -> str | None:
    value = remote.get(key)
    return str(value) if value else None


def normalize_sport(remote: Mapping[str, Any]) -> Sport:
    sport_id = _require_id(remote, "sport_id")
    code = _text(remote, "sport_code")
    return Sport(
        id=sport_id,
        code=code,
        short_label=code.upper(),
        display_name=title_case(remote.get("sport_name")),
    )


def normalize_match(remote: Mapping[str, Any]) -> Match:
    return Match(
        id=_require_id(remote, "id"),
        stage=_text(remote, "stage"),
        side_a=_text(remote, "team_a"),
        side_b=_text(remote, "team_b"),
        start_timestamp=_optional_text(remote, "start_date"),
        end_timestamp=_optional_text(remote, "end_date"),
        venue=_text(remote, "venue"),
        status=_text(remote, "status"),
    )


def normalize_tournament(
    remote: Mapping[str, Any], group: Mapping[str, Any]
) -> Tournament:
    """Normalize a tournament; its sport comes from the enclosing group."""
    tournament_id = _require_id(remote, "id")
    sport_id = _require_id(group, "sport_id")

    raw_matches = remote.get("matches")
    matches: list[Match] = []
    if isinstance(raw_matches, list):
        for raw_match in raw_matches:
            try:
                matches.append(normalize_match(raw_match))
            except MalformedRecord:
                continue

    return Tournament(
        id=tournament_id,
        name=_text(remote, "name"),
        image_url=_text(remote, "tournament_img_url"),
        level=_text(remote, "level"),
        start_timestamp=_text(remote, "start_date"),
        end_timestamp=_text(remote, "end_date"),
        sport_id=sport_id,
        sport_name=title_case(group.get("sport_name")),
        matches=tuple(matches),
    )


def normalize_sports(records: Iterable[Mapping[str, Any]]) -> list[Sport]:
    """Normalize a sports list, skipping malformed records, sorted by name."""
    sports: list[Sport] = []
    for record in records or []:
        try:
            sports.append(normalize_sport(record))
        except MalformedRecord:
            continue
    return sorted(sports, key=lambda s: s.display_name.lower())


def flatten_tournament_groups(groups: Iterable[Mapping[str, Any]]) -> list[Tournament]:
    """Flatten per-sport groups into tournaments in feed order.

    Groups without a tournament list contribute nothing. Malformed groups and
    tournaments are skipped without affecting the rest of the batch.
    """
    tournaments: list[Tournament] = []
    for group in groups or []:
        if not isinstance(group, Mapping):
            continue
        raw_tournaments = group.get("tournaments")
        if not isinstance(raw_tournaments, list):
            continue

        for raw in raw_tournaments:
            try:
                tournaments.append(normalize_tournament(raw, group))
            except MalformedRecord:
                continue

    return tournaments
