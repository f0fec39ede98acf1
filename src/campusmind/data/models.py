"""Data models for the request bundle a caller sends with each message.

Wire format is camelCase (``calendarMarks``, ``totalHeld``); Python attributes
are snake_case. Every field except ``message`` is optional and defaults to an
empty or zero value, so analyzers never see ``None`` containers.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

DEFAULT_USER_NAME = "there"

# First present field wins when resolving a semester's score
SCORE_FIELDS = ("sgpa", "gpa", "score")


class _BundleModel(BaseModel):
    """Shared config: immutable, camelCase aliases, unknown keys ignored, nulls dropped."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        """Treat explicit nulls like absent fields so defaults apply."""
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class ClassEntry(_BundleModel):
    """One class slot in a day's timetable.

    The time window arrives either as ``startTime``/``endTime`` or as a single
    ``time`` string like ``"09:00-10:00"``.
    """

    name: str | None = None
    subject: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    time: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.subject or "class"


class SemesterRecord(_BundleModel):
    """One semester's grade point; exactly one of sgpa/gpa/score is expected."""

    sgpa: float | None = None
    gpa: float | None = None
    score: float | None = None
    semester: str | None = None
    name: str | None = None


class CalendarMark(_BundleModel):
    """A date the student marked in their calendar."""

    date: str = ""
    category_name: str = ""


class SubjectAttendance(_BundleModel):
    """Attendance for a single subject."""

    attended: int = Field(default=0, ge=0)
    held: int = Field(default=0, ge=0)
    percentage: float | None = Field(default=None, ge=0, le=100)

    @property
    def effective_percentage(self) -> float:
        """Reported percentage, or attended/held when the caller left it out."""
        return _resolve_percentage(self.percentage, self.attended, self.held)


class AttendanceSummary(_BundleModel):
    """Overall attendance with an optional per-subject breakdown."""

    total_held: int = Field(default=0, ge=0)
    total_attended: int = Field(default=0, ge=0)
    percentage: float | None = Field(default=None, ge=0, le=100)
    subjects: dict[str, SubjectAttendance] = Field(default_factory=dict)

    @property
    def effective_percentage(self) -> float:
        return _resolve_percentage(self.percentage, self.total_attended, self.total_held)

    @property
    def has_data(self) -> bool:
        return self.total_held > 0


class ExpenseSummary(_BundleModel):
    """Spending totals and per-category amounts."""

    total: float = Field(default=0.0, ge=0)
    this_month: float = Field(default=0.0, ge=0)
    categories: dict[str, float] = Field(default_factory=dict)

    @property
    def has_data(self) -> bool:
        """True when the caller sent any expense field at all."""
        return bool(self.model_fields_set)

    @property
    def has_monthly(self) -> bool:
        """True when the caller reported this month's spend."""
        return "this_month" in self.model_fields_set


class UserProfile(_BundleModel):
    first_name: str | None = None


class RequestBundle(_BundleModel):
    """Everything one request carries: the message plus the user's data."""

    message: str
    user: UserProfile = Field(default_factory=UserProfile)
    user_name: str | None = None
    assignments: dict[str, int] = Field(default_factory=dict)
    timetable: dict[str, list[ClassEntry]] = Field(default_factory=dict)
    today_index: int = Field(default=0, ge=0, le=6)  # Informational only
    cgpa: list[SemesterRecord] = Field(default_factory=list)
    calendar_marks: list[CalendarMark] = Field(default_factory=list)
    attendance: AttendanceSummary = Field(default_factory=AttendanceSummary)
    expenses: ExpenseSummary = Field(default_factory=ExpenseSummary)

    @property
    def resolved_user_name(self) -> str:
        return self.user.first_name or self.user_name or DEFAULT_USER_NAME

    @property
    def pending_assignments(self) -> int:
        return sum(max(0, count) for count in self.assignments.values())


def _resolve_percentage(reported: float | None, attended: int, held: int) -> float:
    if reported is not None:
        return reported
    if held <= 0:
        return 0.0
    return round(min(attended / held * 100, 100.0), 2)
