"""ICS calendar generation from tournament data."""

from __future__ import annotations

from datetime import date, datetime, timedelta

from icalendar import Alarm, Calendar, Event

from tournament_calendar import InvalidTimestamp, Match, Tournament
from tournament_calendar.timekey import date_label, day_key, range_label, to_utc

DEFAULT_MATCH_HOURS = 2
FINISHED_STATUSES = {"completed", "finished", "cancelled", "canceled", "abandoned"}


def create_tournament_calendar(name: str, tournaments: list[Tournament]) -> Calendar:
    """Create an ICS calendar with one all-day event per tournament and one
    timed event per match. Entries whose dates cannot be parsed are left out."""
    cal = Calendar()
    cal.add("prodid", f"-//{name} Tournament Calendar//stapubox.com//")
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")
    cal.add("method", "PUBLISH")
    cal.add("x-wr-calname", f"{name} Tournaments")
    cal.add("x-wr-timezone", "Asia/Kolkata")
    cal.add("x-published-ttl", "PT4H")

    for tournament in tournaments:
        event = _create_tournament_event(tournament)
        if event is None:
            continue
        cal.add_component(event)

        for match in tournament.matches:
            match_event = _create_match_event(tournament, match)
            if match_event is not None:
                cal.add_component(match_event)

    return cal


def _ist_date(value: str) -> date:
    return date.fromisoformat(day_key(value))


def _create_tournament_event(tournament: Tournament) -> Event | None:
    try:
        start = _ist_date(tournament.start_timestamp)
    except InvalidTimestamp:
        return None

    try:
        last_day = _ist_date(tournament.end_timestamp)
    except InvalidTimestamp:
        last_day = start
    last_day = max(last_day, start)
    if last_day == date.max:  # no exclusive end date after it
        return None

    event = Event()
    event.add("summary", f"{tournament.name} ({tournament.sport_name})")
    # All-day events use an exclusive end date
    event.add("dtstart", start)
    event.add("dtend", last_day + timedelta(days=1))

    description = f"Sport: {tournament.sport_name}"
    if tournament.level:
        description += f"\nLevel: {tournament.level}"
    try:
        dates = range_label(tournament.start_timestamp, tournament.end_timestamp)
    except InvalidTimestamp:
        dates = date_label(tournament.start_timestamp)
    description += f"\nDates: {dates}"
    event.add("description", description)
    event.add("uid", f"tournament-{tournament.id}@stapubox.com")
    event.add("transp", "TRANSPARENT")
    return event


def _match_start(tournament: Tournament, match: Match) -> datetime | None:
    for value in (match.start_timestamp, tournament.start_timestamp):
        if not value:
            continue
        try:
            return to_utc(value)
        except InvalidTimestamp:
            continue
    return None


def _create_match_event(tournament: Tournament, match: Match) -> Event | None:
    start = _match_start(tournament, match)
    if start is None:
        return None

    end = None
    if match.end_timestamp:
        try:
            end = to_utc(match.end_timestamp)
        except InvalidTimestamp:
            end = None
    if end is None or end <= start:
        try:
            end = start + timedelta(hours=DEFAULT_MATCH_HOURS)
        except OverflowError:
            return None

    event = Event()
    event.add("summary", f"{match.side_a} vs {match.side_b}")
    event.add("dtstart", start)
    event.add("dtend", end)

    description = f"Tournament: {tournament.name}"
    if match.stage:
        description += f"\nStage: {match.stage}"
    if match.status:
        description += f"\nStatus: {match.status}"
    event.add("description", description)
    if match.venue:
        event.add("location", match.venue)
    event.add("uid", f"match-{match.id}@stapubox.com")

    status = match.status.strip().lower()
    if status in ("cancelled", "canceled"):
        event.add("status", "CANCELLED")
    else:
        event.add("status", "CONFIRMED")

    # Reminders only for fixtures that are still to be played
    if status not in FINISHED_STATUSES:
        alarm = Alarm()
        alarm.add("action", "DISPLAY")
        alarm.add("description", f"{match.side_a} vs {match.side_b} starts in 30 minutes!")
        alarm.add("trigger", timedelta(minutes=-30))
        event.add_component(alarm)
    else:
        event.add("transp", "TRANSPARENT")

    return event
