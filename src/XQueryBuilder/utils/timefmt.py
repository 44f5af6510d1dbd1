"""Human-friendly timestamps for history and favorites listings."""

from __future__ import annotations

import math
import time
from datetime import datetime

# Epoch values below this are seconds, above are milliseconds.
_MS_THRESHOLD = 10_000_000_000


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)


def to_millis(timestamp: int | float) -> float:
    """Normalize an epoch timestamp in seconds or milliseconds to milliseconds."""
    return timestamp * 1000 if timestamp < _MS_THRESHOLD else timestamp


def format_absolute_date(ms: float) -> str:
    """Format epoch milliseconds as e.g. "Jan 15, 2025" in local time."""
    try:
        dt = datetime.fromtimestamp(ms / 1000)
    except (OverflowError, OSError, ValueError):
        return "Unknown date"
    return f"{dt:%b} {dt.day}, {dt.year}"


def format_relative_time(timestamp: int | float, now: int | float | None = None) -> str:
    """Format a timestamp relative to now.

    Args:
        timestamp: Epoch seconds or milliseconds.
        now: Reference time in epoch milliseconds. Defaults to the current time.

    Returns:
        "Just now", "5m ago", "2h ago", "3d ago", "2 weeks ago", or an
        absolute date for anything older than 30 days.
    """
    if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
        return "Unknown time"
    if isinstance(timestamp, float) and not math.isfinite(timestamp):
        return "Unknown time"

    ms = to_millis(timestamp)
    diff = (now_ms() if now is None else now) - ms
    if isinstance(diff, float) and not math.isfinite(diff):
        return "Unknown time"
    if diff < 0:
        return "Just now"

    seconds = int(diff // 1000)
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if seconds < 60:
        return "Just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    if days <= 6:
        return f"{days}d ago"
    if days <= 30:
        weeks = days // 7
        return "1 week ago" if weeks == 1 else f"{weeks} weeks ago"
    return format_absolute_date(ms)
