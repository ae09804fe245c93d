# Fichier: academy/core/utils.py
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional


def utcnow() -> datetime:
    """Naive UTC timestamp, the form SQLite hands back on read."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def keep_earliest(existing: Optional[datetime], candidate: datetime) -> datetime:
    """Return the already recorded timestamp when there is one.

    ``started_at`` is written once and must survive every later update, so
    the stored value always wins over the fresh ``candidate``.
    """
    if existing is not None:
        return existing
    return candidate


def current_streak(days: Iterable[date], today: Optional[date] = None) -> int:
    """Count consecutive activity days ending today (or yesterday)."""
    day_set = set(days)
    if not day_set:
        return 0

    today = today or utcnow().date()
    if today in day_set:
        cursor = today
    elif (today - timedelta(days=1)) in day_set:
        cursor = today - timedelta(days=1)
    else:
        return 0

    streak = 0
    while cursor in day_set:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def longest_streak(days: Iterable[date]) -> int:
    ordered = sorted(set(days))
    best = 0
    run = 0
    previous: Optional[date] = None
    for day in ordered:
        if previous is not None and day - previous == timedelta(days=1):
            run += 1
        else:
            run = 1
        best = max(best, run)
        previous = day
    return best
