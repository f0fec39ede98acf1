"""Assignment deadline windowing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from campusmind.insights.timeutil import days_until, future_sorted

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import date, datetime


@dataclass(frozen=True, slots=True)
class Deadline:
    """Assignments due on one date."""

    due: date
    label: str  # Date string as the caller sent it
    count: int
    days_until: int


def upcoming_deadlines(assignments: Mapping[str, int], now: datetime) -> list[Deadline]:
    """Non-past deadlines with at least one assignment, soonest first."""
    pending = [(label, count) for label, count in assignments.items() if count > 0]
    return [
        Deadline(due=due, label=label, count=count, days_until=days_until(due, now))
        for due, (label, count) in future_sorted(pending, now, key=lambda pair: pair[0])
    ]


def due_within(assignments: Mapping[str, int], now: datetime, days: int = 7) -> list[Deadline]:
    """Deadlines falling ``0 <= days_until <= days`` from today."""
    return [d for d in upcoming_deadlines(assignments, now) if d.days_until <= days]
