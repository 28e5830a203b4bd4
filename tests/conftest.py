"""Shared fixtures: raw StapuBox samples and their normalized forms."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tournament_calendar import Sport, Tournament
from tournament_calendar.normalizer import flatten_tournament_groups, normalize_sports

FIXTURE_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def raw_sports() -> list[dict]:
    return json.loads((FIXTURE_DIR / "sports.json").read_text())


@pytest.fixture
def raw_groups() -> list[dict]:
    return json.loads((FIXTURE_DIR / "tournaments.json").read_text())


@pytest.fixture
def sports(raw_sports: list[dict]) -> list[Sport]:
    return normalize_sports(raw_sports)


@pytest.fixture
def tournaments(raw_groups: list[dict]) -> list[Tournament]:
    return flatten_tournament_groups(raw_groups)


@pytest.fixture
def by_id(tournaments: list[Tournament]) -> dict[int, Tournament]:
    return {t.id: t for t in tournaments}
