"""Calendar mark filtering — future dates and holiday/exam categories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from campusmind.insights.timeutil import days_until, future_sorted

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from datetime import date, datetime

    from campusmind.data.models import CalendarMark

HOLIDAY_KEYWORDS = ("holiday", "break", "vacation")
EXAM_KEYWORDS = ("exam", "test")

# Shown for marks saved without a category
DEFAULT_CATEGORY = "Event"


@dataclass(frozen=True, slots=True)
class UpcomingMark:
    when: date
    label: str
    category: str
    days_until: int


def future_marks(marks: Iterable[CalendarMark], now: datetime) -> list[UpcomingMark]:
    """Marks dated today or later, ascending by date."""
    return [
        UpcomingMark(
            when=when,
            label=mark.date,
            category=mark.category_name.strip() or DEFAULT_CATEGORY,
            days_until=days_until(when, now),
        )
        for when, mark in future_sorted(marks, now, key=lambda m: m.date)
    ]


def filter_category(marks: Sequence[UpcomingMark], keywords: Sequence[str]) -> list[UpcomingMark]:
    """Marks whose category name contains any keyword, case-insensitively."""
    return [m for m in marks if any(k in m.category.lower() for k in keywords)]


def holidays(marks: Sequence[UpcomingMark]) -> list[UpcomingMark]:
    return filter_category(marks, HOLIDAY_KEYWORDS)


def exams(marks: Sequence[UpcomingMark]) -> list[UpcomingMark]:
    return filter_category(marks, EXAM_KEYWORDS)
