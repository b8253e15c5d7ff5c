# app/client/urgency.py
"""
Derived values the dashboard shows next to reminders and collections.

All functions are pure: `now` is always passed in.
"""

from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta, timezone
from typing import Any, Literal

Urgency = Literal["none", "critical", "warning", "normal"]

CRITICAL_WINDOW = timedelta(hours=2)
WARNING_WINDOW = timedelta(hours=24)

CATEGORIES = ("literature", "rituals", "aesthetics", "music")


def as_utc(value: datetime | str) -> datetime:
    """
    Parse API timestamps; naive values are treated as UTC.
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def classify_urgency(
    due_date: datetime | str,
    is_completed: bool,
    now: datetime,
) -> Urgency:
    """
    Urgency bucket of a reminder.

    - completed                         -> "none"
    - overdue, or due in under 2 hours  -> "critical"
    - due in under 24 hours             -> "warning"
    - otherwise                         -> "normal"
    """
    if is_completed:
        return "none"

    remaining = as_utc(due_date) - as_utc(now)
    if remaining < CRITICAL_WINDOW:
        return "critical"
    if remaining < WARNING_WINDOW:
        return "warning"
    return "normal"


def upcoming_reminders(
    reminders: Iterable[Mapping[str, Any]],
    limit: int = 3,
) -> list[Mapping[str, Any]]:
    """
    The `limit` soonest-due reminders that are not completed.

    sorted() is stable, so reminders with the same due date keep their
    input order.
    """
    pending = [r for r in reminders if not r.get("is_completed")]
    pending = sorted(pending, key=lambda r: as_utc(r["due_date"]))
    return pending[:limit]


def counts_by_category(entries: Iterable[Mapping[str, Any]]) -> dict[str, int]:
    """Number of entries per category, zero-filled for all four."""
    counts = dict.fromkeys(CATEGORIES, 0)
    for entry in entries:
        category = entry.get("category")
        if category in counts:
            counts[category] += 1
    return counts
