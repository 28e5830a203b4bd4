"""StapuBox API client for the sports list and tournament feed."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import requests

from tournament_calendar import CalendarConfig, FeedError, Sport, Tournament
from tournament_calendar.cache import load_feed, save_feed
from tournament_calendar.normalizer import flatten_tournament_groups, normalize_sports

BASE_URL = "https://stapubox.com"
SPORTS_PATH = "/sportslist"
TOURNAMENTS_PATH = "/tournament/demo"
TIMEOUT = 15  # seconds
USER_AGENT = "TournamentCalendarBot/1.0 (scheduled calendar build)"


def fetch_payload(path: str, base_url: str = BASE_URL) -> Any:
    """GET a StapuBox endpoint and unwrap its ``data`` envelope.

    The API answers ``{"status", "msg", "err", "error", "data"}``. A set
    ``error``/``err`` or a missing ``data`` raises ``FeedError``; HTTP errors
    raise ``requests.HTTPError``.
    """
    headers = {"User-Agent": USER_AGENT}
    api_key = os.environ.get("STAPUBOX_API_KEY", "")
    if api_key:
        headers["x-api-key"] = api_key

    response = requests.get(f"{base_url}{path}", headers=headers, timeout=TIMEOUT)
    response.raise_for_status()
    envelope = response.json()

    if not isinstance(envelope, dict):
        raise FeedError(f"Unexpected response from {path}")
    if envelope.get("error"):
        raise FeedError(str(envelope["error"]))
    if envelope.get("err"):
        raise FeedError(str(envelope["err"]))
    if envelope.get("data") is None:
        raise FeedError("StapuBox response missing data payload")

    return envelope["data"]


def fetch_sports(base_url: str = BASE_URL, path: str = SPORTS_PATH) -> list[dict]:
    """Fetch raw sport records."""
    return fetch_payload(path, base_url)


def fetch_tournament_groups(
    base_url: str = BASE_URL, path: str = TOURNAMENTS_PATH
) -> list[dict]:
    """Fetch raw per-sport tournament groups."""
    return fetch_payload(path, base_url)


def _fetch_or_cached(name: str, fetch, cache_dir: Path, errors: list[str]) -> list:
    try:
        data = fetch()
    except (requests.RequestException, FeedError, ValueError) as e:
        error_msg = f"Failed to fetch {name}: {e}"
        print(f"  ERROR: {error_msg}")
        errors.append(error_msg)

        cached = load_feed(cache_dir, name)
        if cached is None:
            print(f"  No cached {name} available")
            return []
        print(f"  Using cached {name}")
        return cached

    save_feed(cache_dir, name, data)
    return data


def load_feeds(
    config: CalendarConfig, cache_dir: Path
) -> tuple[list[Sport], list[Tournament], list[str]]:
    """Fetch and normalize both feeds, falling back to the cache per feed.

    Returns ``(sports, tournaments, errors)``.
    """
    errors: list[str] = []

    print("Fetching sports list from StapuBox...")
    raw_sports = _fetch_or_cached(
        "sports",
        lambda: fetch_sports(config.base_url, config.sports_path),
        cache_dir,
        errors,
    )
    sports = normalize_sports(raw_sports)
    print(f"  Found {len(sports)} sports")

    print("Fetching tournaments from StapuBox...")
    raw_groups = _fetch_or_cached(
        "tournaments",
        lambda: fetch_tournament_groups(config.base_url, config.tournaments_path),
        cache_dir,
        errors,
    )
    tournaments = flatten_tournament_groups(raw_groups)
    print(f"  Found {len(tournaments)} tournaments")

    return sports, tournaments, errors
