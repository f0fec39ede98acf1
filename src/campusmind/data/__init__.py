"""Request data — the per-message bundle of timetable, grades, attendance and spend."""

from campusmind.data.models import (
    DEFAULT_USER_NAME,
    SCORE_FIELDS,
    AttendanceSummary,
    CalendarMark,
    ClassEntry,
    ExpenseSummary,
    RequestBundle,
    SemesterRecord,
    SubjectAttendance,
    UserProfile,
)

__all__ = [
    "DEFAULT_USER_NAME",
    "SCORE_FIELDS",
    "AttendanceSummary",
    "CalendarMark",
    "ClassEntry",
    "ExpenseSummary",
    "RequestBundle",
    "SemesterRecord",
    "SubjectAttendance",
    "UserProfile",
]
