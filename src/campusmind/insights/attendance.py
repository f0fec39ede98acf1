"""Attendance math — threshold bands, classes needed, per-subject standing."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from campusmind.data.models import SubjectAttendance

WARNING_MARKER = "⚠️"
PASS_MARKER = "✓"


class AttendanceBand(StrEnum):
    BELOW = "below"
    ACCEPTABLE = "acceptable"
    GOOD = "good"


@dataclass(frozen=True, slots=True)
class SubjectStanding:
    name: str
    attended: int
    held: int
    percentage: float
    marker: str


def classes_needed(held: int, attended: int, ratio: float = 0.75) -> int:
    """Further classes to attend before reaching ``ratio`` of ``held``; never negative."""
    return max(0, math.ceil(held * ratio) - attended)


def attendance_band(
    percentage: float, threshold: float = 75.0, good: float = 85.0
) -> AttendanceBand:
    if percentage < threshold:
        return AttendanceBand.BELOW
    if percentage < good:
        return AttendanceBand.ACCEPTABLE
    return AttendanceBand.GOOD


def subject_marker(percentage: float, threshold: float = 75.0, good: float = 85.0) -> str:
    band = attendance_band(percentage, threshold, good)
    if band is AttendanceBand.BELOW:
        return WARNING_MARKER
    if band is AttendanceBand.GOOD:
        return PASS_MARKER
    return ""


def subject_breakdown(
    subjects: Mapping[str, SubjectAttendance],
    threshold: float = 75.0,
    good: float = 85.0,
) -> list[SubjectStanding]:
    """Subjects sorted lowest percentage first (stable for ties)."""
    standings = [
        SubjectStanding(
            name=name,
            attended=data.attended,
            held=data.held,
            percentage=data.effective_percentage,
            marker=subject_marker(data.effective_percentage, threshold, good),
        )
        for name, data in subjects.items()
    ]
    standings.sort(key=lambda s: s.percentage)
    return standings


def lowest_subject(
    subjects: Mapping[str, SubjectAttendance],
    threshold: float = 75.0,
    good: float = 85.0,
) -> SubjectStanding | None:
    """Subject with the lowest percentage among those with classes held."""
    candidates = (s for s in subject_breakdown(subjects, threshold, good) if s.held > 0)
    return next(candidates, None)
