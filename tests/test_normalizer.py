"""Tests for feed normalization."""

from __future__ import annotations

import pytest

from tournament_calendar import MalformedRecord, Tournament
from tournament_calendar.days import highlighted_days
from tournament_calendar.normalizer import (
    flatten_tournament_groups,
    normalize_match,
    normalize_sport,
    normalize_tournament,
    title_case,
)

GROUP = {"sport_id": 7, "sport_name": "BADMINTON"}


class TestTitleCase:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("BADMINTON", "Badminton"),
            ("table   tennis", "Table Tennis"),
            ("  kho KHO ", "Kho Kho"),
            ("o'neil", "O'neil"),
            ("", ""),
            ("   ", ""),
            (None, ""),
        ],
    )
    def test_title_case(self, value, expected: str) -> None:
        assert title_case(value) == expected


class TestNormalizeSport:
    def test_fields(self) -> None:
        sport = normalize_sport({"sport_id": 3, "sport_code": "tt", "sport_name": "table tennis"})
        assert sport.id == 3
        assert sport.code == "tt"
        assert sport.short_label == "TT"
        assert sport.display_name == "Table Tennis"

    def test_missing_id(self) -> None:
        with pytest.raises(MalformedRecord):
            normalize_sport({"sport_code": "tt", "sport_name": "table tennis"})

    def test_collection_skips_malformed_and_sorts(self, sports) -> None:
        assert [s.display_name for s in sports] == ["Badminton", "Cricket", "Table Tennis"]


class TestNormalizeMatch:
    def test_fields(self) -> None:
        match = normalize_match({
            "id": 5, "stage": "Final", "team_a": "A", "team_b": "B",
            "start_date": "2025-08-15T10:00:00", "end_date": None,
            "venue": "Court 1", "status": "Upcoming",
        })
        assert match.side_a == "A"
        assert match.side_b == "B"
        assert match.start_timestamp == "2025-08-15T10:00:00"
        assert match.end_timestamp is None

    def test_optional_fields_default_to_empty(self) -> None:
        match = normalize_match({"id": 5})
        assert match.stage == ""
        assert match.venue == ""
        assert match.start_timestamp is None

    @pytest.mark.parametrize("record", [{}, {"id": None}, {"id": "5"}, {"id": True}, {"id": 1.5}, None])
    def test_bad_id(self, record) -> None:
        with pytest.raises(MalformedRecord):
            normalize_match(record)


class TestNormalizeTournament:
    def test_sport_comes_from_group(self) -> None:
        tournament = normalize_tournament(
            {"id": 1, "name": "Open", "start_date": "2025-08-15T10:00:00", "sport_id": 99},
            GROUP,
        )
        assert tournament.sport_id == 7
        assert tournament.sport_name == "Badminton"
        assert tournament.name == "Open"

    @pytest.mark.parametrize("matches", [None, "oops", {"id": 1}])
    def test_missing_matches_become_empty(self, matches) -> None:
        remote = {"id": 1, "start_date": "2025-08-15T10:00:00", "matches": matches}
        assert normalize_tournament(remote, GROUP).matches == ()

    def test_absent_matches_become_empty(self) -> None:
        tournament = normalize_tournament({"id": 1}, GROUP)
        assert tournament.matches == ()
        assert tournament.featured_match is None
        assert tournament.image_url == ""
        assert tournament.end_timestamp == ""

    def test_null_matches_still_highlight_start_day(self) -> None:
        tournament = normalize_tournament(
            {"id": 1, "start_date": "2025-08-15T10:00:00", "matches": None}, GROUP
        )
        assert tournament.matches == ()
        assert highlighted_days([tournament]) == {"2025-08-15"}

    def test_missing_id(self) -> None:
        with pytest.raises(MalformedRecord):
            normalize_tournament({"name": "No id"}, GROUP)

    def test_missing_group_sport(self) -> None:
        with pytest.raises(MalformedRecord):
            normalize_tournament({"id": 1}, {"sport_name": "ghost"})


class TestFlattenGroups:
    def test_flattened_in_feed_order(self, tournaments: list[Tournament]) -> None:
        assert [t.id for t in tournaments] == [101, 102, 103, 201, 202]

    def test_matches_keep_upstream_order(self, by_id) -> None:
        matches = by_id[101].matches
        assert [m.id for m in matches] == [1001, 1002]
        assert by_id[101].featured_match.id == 1001

    def test_null_and_invalid_match_lists(self, by_id) -> None:
        assert by_id[102].matches == ()
        assert by_id[103].matches == ()
        assert by_id[202].matches == ()

    def test_image_url_null_becomes_empty(self, by_id) -> None:
        assert by_id[102].image_url == ""

    def test_sport_names(self, by_id) -> None:
        assert by_id[101].sport_name == "Badminton"
        assert by_id[201].sport_name == "Table Tennis"
        assert by_id[201].sport_id == 3

    def test_garbage_input(self) -> None:
        assert flatten_tournament_groups(None) == []
        assert flatten_tournament_groups(["nope", {"sport_id": 1}]) == []
