"""Pushover alerts for failed feed fetches and calendar builds."""

from __future__ import annotations

import os

import requests

PUSHOVER_URL = "https://api.pushover.net/1/messages.json"
MAX_MESSAGE_LENGTH = 1024  # Pushover's limit


def format_error_summary(
    job: str, errors: list[str], limit: int = MAX_MESSAGE_LENGTH
) -> str:
    """Summary of a run's errors that fits in one Pushover message.

    Each error keeps its own context (which feed, month or sport failed).
    Errors that do not fit are counted on a final line instead of being cut
    off mid-message.
    """
    lines = [f"{job} completed with {len(errors)} error(s):", ""]
    for index, err in enumerate(errors):
        left = len(errors) - index
        candidate = lines + [f"- {err}"]
        # Leave room for the "more" line the next error might need
        reserve = [f"... and {left - 1} more"] if left > 1 else []
        if len("\n".join(candidate + reserve)) > limit:
            lines.append(f"... and {left} more")
            break
        lines = candidate
    return "\n".join(lines)[:limit]


def send_error_notification(message: str, title: str = "Tournament Calendar Error") -> bool:
    """Send an error notification via Pushover.

    Reads PUSHOVER_USER_KEY and PUSHOVER_API_TOKEN from environment.
    Returns True if sent, False if credentials are missing or the send failed.
    """
    user_key = os.environ.get("PUSHOVER_USER_KEY", "")
    api_token = os.environ.get("PUSHOVER_API_TOKEN", "")

    if not user_key or not api_token:
        print("  Pushover not configured (set PUSHOVER_USER_KEY and PUSHOVER_API_TOKEN)")
        return False

    try:
        resp = requests.post(
            PUSHOVER_URL,
            data={
                "token": api_token,
                "user": user_key,
                "title": title,
                "message": message[:MAX_MESSAGE_LENGTH],
                "priority": 0,
            },
            timeout=10,
        )
        resp.raise_for_status()
    except requests.RequestException as e:
        print(f"  Failed to send Pushover notification: {e}")
        return False

    print(f"  Pushover notification sent: {title}")
    return True


def report_errors(job: str, errors: list[str]) -> bool:
    """Print a run's errors and alert once. Returns True if there were any."""
    if not errors:
        return False

    print(f"\nErrors encountered: {len(errors)}")
    for err in errors:
        print(f"  - {err}")
    send_error_notification(format_error_summary(job, errors), title=f"Tournament Calendar: {job}")
    return True
