"""Timetable analysis — per-day class lists and the weekly load pattern."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from campusmind.insights.timeutil import DAYS

if TYPE_CHECKING:
    from campusmind.data.models import ClassEntry, RequestBundle


@dataclass(frozen=True, slots=True)
class DayLoad:
    """Class count for one day of the week (Monday=0)."""

    day: int
    count: int


@dataclass(frozen=True, slots=True)
class WeeklyPattern:
    """Weekly class distribution.

    ``busiest`` is the first day reaching the maximum count; ``lightest`` the
    first day with the smallest non-zero count. Both are None for an empty week.
    """

    counts: tuple[int, ...]
    total_classes: int
    days_with_classes: int
    busiest: DayLoad | None
    lightest: DayLoad | None

    @property
    def free_days(self) -> list[int]:
        return [day for day, count in enumerate(self.counts) if count == 0]


def normalize_class_time(entry: ClassEntry) -> ClassEntry:
    """Expand a ``"HH:MM-HH:MM"`` time string into start/end fields."""
    if entry.start_time and entry.end_time:
        return entry
    if entry.time and "-" in entry.time:
        start, end = (part.strip() for part in entry.time.split("-", 1))
        return entry.model_copy(update={"start_time": start, "end_time": end})
    return entry


def classes_for_day(bundle: RequestBundle, day: int) -> list[ClassEntry]:
    return [normalize_class_time(c) for c in bundle.timetable.get(f"day_{day}", [])]


def analyze_week(bundle: RequestBundle) -> WeeklyPattern:
    counts = tuple(len(classes_for_day(bundle, day)) for day in range(len(DAYS)))

    busiest: DayLoad | None = None
    lightest: DayLoad | None = None
    for day, count in enumerate(counts):
        if count == 0:
            continue
        if busiest is None or count > busiest.count:
            busiest = DayLoad(day, count)
        if lightest is None or count < lightest.count:
            lightest = DayLoad(day, count)

    return WeeklyPattern(
        counts=counts,
        total_classes=sum(counts),
        days_with_classes=sum(1 for count in counts if count > 0),
        busiest=busiest,
        lightest=lightest,
    )
