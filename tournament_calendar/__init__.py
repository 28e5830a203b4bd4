"""Tournament Calendar — shared data models and errors."""

from __future__ import annotations

from dataclasses import dataclass


class InvalidTimestamp(ValueError):
    """A timestamp string could not be parsed into an instant."""


class InvalidMonth(ValueError):
    """A month selector is not a valid ``YYYY-MM`` key or month name."""


class MalformedRecord(ValueError):
    """An upstream record lacks a required identity field."""


class FeedError(Exception):
    """The upstream feed answered with an error payload."""


@dataclass(frozen=True)
class Sport:
    """A sport from the upstream sports list."""

    id: int
    code: str
    short_label: str
    display_name: str


@dataclass(frozen=True)
class Match:
    """A single fixture inside a tournament."""

    id: int
    stage: str
    side_a: str
    side_b: str
    start_timestamp: str | None
    end_timestamp: str | None
    venue: str
    status: str


@dataclass(frozen=True)
class Tournament:
    """A tournament with its fixtures in upstream order."""

    id: int
    name: str
    image_url: str
    level: str
    start_timestamp: str
    end_timestamp: str
    sport_id: int
    sport_name: str
    matches: tuple[Match, ...] = ()

    @property
    def featured_match(self) -> Match | None:
        return self.matches[0] if self.matches else None


@dataclass(frozen=True)
class CalendarCell:
    """One day cell of a 6x7 month grid."""

    day_key: str
    label: str
    in_target_month: bool


@dataclass
class CalendarConfig:
    """Calendar months to publish and where to fetch the feed from."""

    months: list[str]
    base_url: str = "https://stapubox.com"
    sports_path: str = "/sportslist"
    tournaments_path: str = "/tournament/demo"
