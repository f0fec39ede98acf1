"""Grade trend math over semester records."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from campusmind.data.models import SCORE_FIELDS

if TYPE_CHECKING:
    from collections.abc import Sequence

    from campusmind.data.models import SemesterRecord

# Difference (latest - first) beyond which a change counts as strong
STRONG_CHANGE = 0.3


class TrendBand(StrEnum):
    STRONG_IMPROVEMENT = "strong improvement"
    SLIGHT_IMPROVEMENT = "slight improvement"
    SIGNIFICANT_DROP = "significant drop"
    SLIGHT_DECLINE = "slight decline"
    STABLE = "stable"


TREND_ICONS: dict[TrendBand, str] = {
    TrendBand.STRONG_IMPROVEMENT: "📈",
    TrendBand.SLIGHT_IMPROVEMENT: "📈",
    TrendBand.SIGNIFICANT_DROP: "📉",
    TrendBand.SLIGHT_DECLINE: "📉",
    TrendBand.STABLE: "➡️",
}


@dataclass(frozen=True, slots=True)
class GradeTrend:
    first: float
    latest: float
    difference: float
    band: TrendBand
    semesters: int


def resolve_score(record: SemesterRecord) -> float:
    """First present score field by priority (sgpa, gpa, score); 0.0 if none."""
    for field_name in SCORE_FIELDS:
        value = getattr(record, field_name)
        if value is not None:
            return float(value)
    return 0.0


def semester_label(record: SemesterRecord, position: int) -> str:
    """Display label; ``position`` is 1-based."""
    return record.semester or record.name or f"Semester {position}"


def classify_trend(difference: float) -> TrendBand:
    if difference > STRONG_CHANGE:
        return TrendBand.STRONG_IMPROVEMENT
    if difference > 0:
        return TrendBand.SLIGHT_IMPROVEMENT
    if difference < -STRONG_CHANGE:
        return TrendBand.SIGNIFICANT_DROP
    if difference < 0:
        return TrendBand.SLIGHT_DECLINE
    return TrendBand.STABLE


def grade_trend(records: Sequence[SemesterRecord]) -> GradeTrend | None:
    """Trend from first to latest semester; None with fewer than two semesters."""
    if len(records) < 2:
        return None
    first = resolve_score(records[0])
    latest = resolve_score(records[-1])
    difference = latest - first
    return GradeTrend(
        first=first,
        latest=latest,
        difference=difference,
        band=classify_trend(difference),
        semesters=len(records),
    )


def cumulative_average(records: Sequence[SemesterRecord]) -> float | None:
    """Mean of all semester scores, only defined for more than one semester."""
    if len(records) < 2:
        return None
    return sum(resolve_score(r) for r in records) / len(records)
