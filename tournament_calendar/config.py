"""Loading of calendar.json."""

from __future__ import annotations

import json

from tournament_calendar import CalendarConfig
from tournament_calendar.calendar_grid import normalize_month


def load_config(path: str = "calendar.json") -> CalendarConfig:
    """Load the calendar configuration; month selectors are normalized."""
    with open(path) as f:
        data = json.load(f)

    config = CalendarConfig(months=[normalize_month(m) for m in data["months"]])
    for key in ("base_url", "sports_path", "tournaments_path"):
        if data.get(key):
            setattr(config, key, data[key])
    return config
