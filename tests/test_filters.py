"""Tests for month/sport filtering and day aggregation."""

from __future__ import annotations

import pytest

from tournament_calendar import InvalidMonth, Tournament
from tournament_calendar.days import by_day, highlighted_days, select_day
from tournament_calendar.filters import (
    ALL_SPORTS,
    filter_tournaments,
    parse_filters,
    parse_sport_selector,
    sport_options,
)
from tournament_calendar.timekey import day_key


def ids(tournaments: list[Tournament]) -> list[int]:
    return [t.id for t in tournaments]


class TestFilterTournaments:
    def test_all_marker_returns_everything_in_order(self, tournaments) -> None:
        result = filter_tournaments(tournaments, sport_id=ALL_SPORTS)
        assert result == tournaments
        assert result is not tournaments

    def test_no_criteria(self, tournaments) -> None:
        assert filter_tournaments(tournaments) == tournaments

    def test_sport_only(self, tournaments) -> None:
        assert ids(filter_tournaments(tournaments, sport_id=3)) == [201, 202]

    def test_unknown_sport(self, tournaments) -> None:
        assert filter_tournaments(tournaments, sport_id=42) == []

    def test_month_uses_ist_projection(self, tournaments) -> None:
        # 102 starts 2025-08-31T19:00Z, which is 1 Sep in IST
        assert ids(filter_tournaments(tournaments, month_key="2025-08")) == [101]
        assert ids(filter_tournaments(tournaments, month_key="2025-09")) == [102, 201, 202]

    def test_month_and_sport_compose(self, tournaments) -> None:
        result = filter_tournaments(tournaments, month_key="2025-09", sport_id=3)
        assert ids(result) == [201, 202]
        assert filter_tournaments(tournaments, month_key="2025-08", sport_id=3) == []

    def test_unparseable_start_never_matches_a_month(self, by_id) -> None:
        broken = by_id[103]
        assert filter_tournaments([broken], month_key="2025-08") == []
        assert filter_tournaments([broken]) == [broken]

    @pytest.mark.parametrize(
        "month, sport",
        [(None, ALL_SPORTS), ("2025-09", ALL_SPORTS), ("2025-09", 3), (None, 7), ("2025-10", 7)],
    )
    def test_idempotent_and_order_preserving(self, tournaments, month, sport) -> None:
        once = filter_tournaments(tournaments, month_key=month, sport_id=sport)
        twice = filter_tournaments(once, month_key=month, sport_id=sport)
        assert once == twice

        positions = [tournaments.index(t) for t in once]
        assert positions == sorted(positions)


class TestSelectors:
    @pytest.mark.parametrize(
        "value, expected",
        [(None, ALL_SPORTS), ("", ALL_SPORTS), ("ALL", ALL_SPORTS), ("all", ALL_SPORTS),
         ("7", 7), (" 12 ", 12), (3, 3)],
    )
    def test_parse_sport_selector(self, value, expected) -> None:
        assert parse_sport_selector(value) == expected

    def test_parse_sport_selector_rejects_garbage(self) -> None:
        with pytest.raises(ValueError):
            parse_sport_selector("tennis")

    def test_parse_filters(self) -> None:
        assert parse_filters("August 2025", "3") == ("2025-08", 3)
        assert parse_filters(None, None) == (None, ALL_SPORTS)

    def test_parse_filters_bad_month(self) -> None:
        with pytest.raises(InvalidMonth):
            parse_filters("2025-15", "3")

    def test_sport_options(self, sports) -> None:
        options = sport_options(sports)
        assert options[0] == {"id": "ALL", "label": "All Sports", "code": "ALL"}
        assert [o["label"] for o in options[1:]] == ["Badminton", "Cricket", "Table Tennis"]
        assert options[1]["id"] == 7

    def test_sport_options_without_sports(self) -> None:
        assert sport_options(None) == [{"id": "ALL", "label": "All Sports", "code": "ALL"}]


class TestDayAggregation:
    def test_highlighted_days(self, tournaments) -> None:
        assert highlighted_days(tournaments) == {
            "2025-08-15",
            "2025-09-01",
            "2025-09-02",
            "2025-09-03",
        }

    def test_highlighted_days_subset_of_parseable_starts(self, tournaments) -> None:
        expected = set()
        for t in tournaments:
            try:
                expected.add(day_key(t.start_timestamp))
            except ValueError:
                continue
        assert highlighted_days(tournaments) <= expected

    def test_highlighted_days_empty(self) -> None:
        assert highlighted_days([]) == set()

    def test_by_day_without_selection(self, tournaments) -> None:
        result = by_day(tournaments, None)
        assert result == tournaments
        assert result is not tournaments

    def test_by_day(self, tournaments) -> None:
        assert ids(by_day(tournaments, "2025-09-02")) == [201]
        assert ids(by_day(tournaments, "2025-09-03")) == [202]
        assert by_day(tournaments, "2025-09-04") == []

    def test_select_day_toggles(self) -> None:
        selected = select_day(None, "2025-09-02")
        assert selected == "2025-09-02"
        assert select_day(selected, "2025-09-03") == "2025-09-03"
        assert select_day(selected, "2025-09-02") is None
        assert select_day(selected, None) is None


def tournament_starting(tournament_id: int, start: str) -> Tournament:
    return Tournament(
        id=tournament_id,
        name=f"Edge {tournament_id}",
        image_url="",
        level="",
        start_timestamp=start,
        end_timestamp=start,
        sport_id=7,
        sport_name="Badminton",
    )


class TestOutOfRangeStarts:
    """Starts that parse but fall outside the representable date range."""

    @pytest.fixture
    def mixed(self, by_id) -> list[Tournament]:
        return [
            tournament_starting(1, "9999-12-31T23:00:00"),
            by_id[101],
            tournament_starting(2, "0001-01-01T00:00:00+14:00"),
        ]

    def test_filter_skips_them(self, mixed) -> None:
        assert ids(filter_tournaments(mixed, month_key="2025-08")) == [101]
        assert ids(filter_tournaments(mixed, sport_id=7)) == [1, 101, 2]

    def test_highlighted_days_skip_them(self, mixed) -> None:
        assert highlighted_days(mixed) == {"2025-08-15"}

    def test_by_day_skips_them(self, mixed) -> None:
        assert ids(by_day(mixed, "2025-08-01")) == []
        assert ids(by_day(mixed, "2025-08-15")) == [101]
