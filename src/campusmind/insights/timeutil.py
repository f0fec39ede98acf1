"""Time helpers shared by every analyzer.

All functions take the request's single ``now`` instant instead of reading the
clock, so one reply never mixes two different notions of "today".
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

logger = logging.getLogger(__name__)

DAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

T = TypeVar("T")


def day_name(index: int) -> str:
    """Monday-indexed day name; out-of-range indexes read as ``Day N``."""
    if 0 <= index < len(DAYS):
        return DAYS[index]
    return f"Day {index + 1}"


def weekday_index(now: datetime) -> int:
    """Monday=0 … Sunday=6."""
    return now.weekday()


def parse_iso_date(value: str) -> date | None:
    """Parse ``YYYY-MM-DD`` (or a full ISO timestamp) to a date, None if invalid."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.strip()).date()
    except ValueError:
        logger.debug("Ignoring unparseable date: %r", value)
        return None


def days_until(target: date, now: datetime) -> int:
    """Whole calendar days from today to ``target``; negative when past."""
    return (target - now.date()).days


def future_sorted(
    items: Iterable[T],
    now: datetime,
    key: Callable[[T], str],
) -> list[tuple[date, T]]:
    """Keep items dated today or later, ascending by date.

    Items whose date cannot be parsed are dropped. The sort is stable, so items
    sharing a date keep their input order.
    """
    today = now.date()
    dated: list[tuple[date, T]] = []
    for item in items:
        parsed = parse_iso_date(key(item))
        if parsed is not None and parsed >= today:
            dated.append((parsed, item))
    dated.sort(key=lambda pair: pair[0])
    return dated


def time_of_day_greeting(now: datetime) -> str:
    if now.hour < 12:
        return "Good morning"
    if now.hour < 17:
        return "Good afternoon"
    return "Good evening"
