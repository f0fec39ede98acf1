"""Insights — pure analyzers over one request's timetable, grades, attendance and spend."""

from campusmind.insights.assignments import Deadline, due_within, upcoming_deadlines
from campusmind.insights.attendance import (
    AttendanceBand,
    SubjectStanding,
    attendance_band,
    classes_needed,
    lowest_subject,
    subject_breakdown,
)
from campusmind.insights.calendar import UpcomingMark, exams, future_marks, holidays
from campusmind.insights.expenses import CategoryShare, top_categories
from campusmind.insights.grades import (
    GradeTrend,
    TrendBand,
    classify_trend,
    cumulative_average,
    grade_trend,
    resolve_score,
)
from campusmind.insights.timetable import (
    DayLoad,
    WeeklyPattern,
    analyze_week,
    classes_for_day,
    normalize_class_time,
)

__all__ = [
    "AttendanceBand",
    "CategoryShare",
    "DayLoad",
    "Deadline",
    "GradeTrend",
    "SubjectStanding",
    "TrendBand",
    "UpcomingMark",
    "WeeklyPattern",
    "analyze_week",
    "attendance_band",
    "classes_for_day",
    "classes_needed",
    "classify_trend",
    "cumulative_average",
    "due_within",
    "exams",
    "future_marks",
    "grade_trend",
    "holidays",
    "lowest_subject",
    "normalize_class_time",
    "resolve_score",
    "subject_breakdown",
    "top_categories",
    "upcoming_deadlines",
]
