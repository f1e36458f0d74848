"""
Watering Status Calculator
==========================
Derives whether a plant needs water from its last watering and its interval.

The result is never persisted. Every read (API responses, MQTT publishes,
the reconciler tick) recomputes it from the store.

Usage:
    status, next_due = compute_status("2026-03-01T08:00:00Z", 7)
    status.value   # "ok" | "due" | "overdue"
"""

from __future__ import annotations

from datetime import date, timedelta
from enum import Enum

from app.utils.time import utc_today


class WateringStatus(str, Enum):
    """Watering state of a plant relative to today (UTC)."""

    OK = "ok"
    DUE = "due"
    OVERDUE = "overdue"

    def __str__(self) -> str:
        return self.value


def _parse_date(value: str) -> date | None:
    # Only the calendar date matters; any time-of-day suffix is ignored.
    try:
        return date.fromisoformat(value[:10])
    except (TypeError, ValueError):
        return None


def compute_status(
    last_watered: str | None,
    interval_days: int,
    today: date | None = None,
) -> tuple[WateringStatus, date | None]:
    """
    Compute watering status and next-due date.

    Args:
        last_watered: ISO-8601 date or datetime of the latest watering, or None
            when the plant was never watered.
        interval_days: Watering interval in whole days. Negative values are
            treated as 0 (due on the day of watering).
        today: Reference date; defaults to the current UTC date.

    Returns:
        ``(status, next_due)``. ``next_due`` is None when it cannot be computed
        (never watered, an unparseable stored value, or an interval that
        runs past the calendar).
    """
    if last_watered is None:
        return WateringStatus.DUE, None

    last_date = _parse_date(last_watered)
    if last_date is None:
        return WateringStatus.DUE, None

    try:
        next_due = last_date + timedelta(days=max(interval_days, 0))
    except OverflowError:
        return WateringStatus.DUE, None
    if today is None:
        today = utc_today()

    if today > next_due:
        return WateringStatus.OVERDUE, next_due
    if today == next_due:
        return WateringStatus.DUE, next_due
    return WateringStatus.OK, next_due
