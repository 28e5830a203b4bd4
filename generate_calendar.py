#!/usr/bin/env python3
"""
Tournament Calendar — ICS Generator

Fetches tournaments from StapuBox and writes one ICS calendar per sport plus
an all-sports calendar to public/. A calendar that fails to build falls back
to its last good copy from cache/.
"""

from __future__ import annotations

import re
import sys
from pathlib import Path
from typing import Iterable

from tournament_calendar import Sport
from tournament_calendar.cache import load_calendar, save_calendar, validate_ics
from tournament_calendar.calendar_gen import create_tournament_calendar
from tournament_calendar.client import load_feeds
from tournament_calendar.config import load_config
from tournament_calendar.filters import ALL_SPORTS, filter_tournaments
from tournament_calendar.notify import report_errors

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def calendar_targets(sports: Iterable[Sport]) -> list[tuple[str, str, int | str]]:
    """(slug, name, sport_id) for the all-sports calendar and each sport.

    Slugs come from the sport code reduced to ``[a-z0-9-]``, or the sport id
    when nothing is left. A slug that is already taken gets the sport id
    appended, so every calendar writes its own file. Repeated sport ids are
    skipped.
    """
    targets: list[tuple[str, str, int | str]] = [("all", "All Sports", ALL_SPORTS)]
    taken = {"all"}
    seen_ids: set[int] = set()
    for sport in sports:
        if sport.id in seen_ids:
            print(f"  Skipping repeated sport {sport.id} ({sport.display_name})")
            continue
        seen_ids.add(sport.id)

        slug = _SLUG_RE.sub("-", sport.code.lower()).strip("-") or str(sport.id)
        while slug in taken:
            slug = f"{slug}-{sport.id}"
        taken.add(slug)
        targets.append((slug, sport.display_name, sport.id))
    return targets


def main() -> int:
    config = load_config()
    output_dir = Path("public")
    output_dir.mkdir(exist_ok=True)
    cache_dir = Path("cache")

    sports, tournaments, errors = load_feeds(config, cache_dir)

    targets = calendar_targets(sports)
    for slug, name, sport_id in targets:
        print(f"\nBuilding {name} calendar...")
        ics_path = output_dir / f"{slug}.ics"

        try:
            selected = filter_tournaments(tournaments, sport_id=sport_id)
            ics_bytes = create_tournament_calendar(name, selected).to_ical()
            if not validate_ics(ics_bytes):
                raise ValueError("Generated ICS failed validation")

            ics_path.write_bytes(ics_bytes)
            save_calendar(cache_dir, slug, ics_bytes)
            print(f"  {len(selected)} tournaments, saved {ics_path}")

        except Exception as e:
            error_msg = f"Failed to build {name} calendar: {e}"
            print(f"  ERROR: {error_msg}")
            errors.append(error_msg)

            cached = load_calendar(cache_dir, slug)
            if cached:
                print(f"  Using cached calendar for {name}")
                ics_path.write_bytes(cached)

    print(f"\nGenerated {len(targets)} calendar(s)")
    if report_errors("Calendar generation", errors):
        return 1

    print("Done — all calendars generated successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
