"""On-disk cache of raw feeds and built calendars, used as fallback when
the upstream fetch fails."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def _cache_file(cache_dir: Path, name: str, suffix: str) -> Path:
    return cache_dir / f"{name.lower()}{suffix}"


def save_feed(cache_dir: Path, name: str, payload: Any) -> None:
    """Store a raw feed payload (the unwrapped ``data`` of a response)."""
    cache_dir.mkdir(parents=True, exist_ok=True)
    text = json.dumps(payload, ensure_ascii=False)
    _cache_file(cache_dir, name, ".json").write_text(text, encoding="utf-8")


def load_feed(cache_dir: Path, name: str) -> Any | None:
    """Load a cached feed payload. Returns None if missing or unreadable."""
    cache_file = _cache_file(cache_dir, name, ".json")
    if not cache_file.exists():
        return None
    try:
        return json.loads(cache_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        return None


def save_calendar(cache_dir: Path, slug: str, ics_data: bytes) -> None:
    cache_dir.mkdir(parents=True, exist_ok=True)
    _cache_file(cache_dir, slug, ".ics").write_bytes(ics_data)


def load_calendar(cache_dir: Path, slug: str) -> bytes | None:
    cache_file = _cache_file(cache_dir, slug, ".ics")
    return cache_file.read_bytes() if cache_file.exists() else None


def validate_ics(data: bytes) -> bool:
    """Basic check that ICS bytes hold a complete VCALENDAR."""
    text = data.decode("utf-8", errors="replace")
    return text.startswith("BEGIN:VCALENDAR") and "END:VCALENDAR" in text
