"""Message router — keyword-based intent classification for chat messages.

Classifies a sanitized message into exactly one intent, then into a sub-case
within that intent, by walking ordered rule tables. The first matching rule
wins, so table order is the precedence: ``"spend this month"`` must hit
EXPENSE_MONTHLY before the broader EXPENSE_INSIGHTS rule sees it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from campusmind.insights.timeutil import DAYS


class Intent(StrEnum):
    """Top-level category for an incoming message."""

    NAME_QUERY = "NAME_QUERY"
    EXPENSE_MONTHLY = "EXPENSE_MONTHLY"
    EXPENSE_INSIGHTS = "EXPENSE_INSIGHTS"
    ATTENDANCE_INSIGHTS = "ATTENDANCE_INSIGHTS"
    ACADEMIC_INSIGHTS = "ACADEMIC_INSIGHTS"
    ASSIGNMENT_PLANNING = "ASSIGNMENT_PLANNING"
    CALENDAR_MANAGEMENT = "CALENDAR_MANAGEMENT"
    TIMETABLE_ANALYSIS = "TIMETABLE_ANALYSIS"
    GREETING = "GREETING"
    GRATITUDE = "GRATITUDE"
    GUIDANCE = "GUIDANCE"
    ERROR = "ERROR"  # Never classified; set by the responder on failure


class Subcase(StrEnum):
    """Finer-grained branch within an intent."""

    # Attendance
    SUBJECT_BREAKDOWN = "subject_breakdown"
    LOWEST_SUBJECT = "lowest_subject"
    OVERALL = "overall"
    # Grades
    ALL_SEMESTERS = "all_semesters"
    TREND = "trend"
    LATEST = "latest"
    # Assignments
    DUE_THIS_WEEK = "due_this_week"
    NEXT_DEADLINE = "next_deadline"
    PENDING_SUMMARY = "pending_summary"
    # Calendar
    NEXT_HOLIDAY = "next_holiday"
    NEXT_EXAM = "next_exam"
    NEXT_MARK = "next_mark"
    ALL_UPCOMING = "all_upcoming"
    # Timetable
    BUSIEST_DAY = "busiest_day"
    WORKLOAD = "workload"
    TOMORROW = "tomorrow"
    TODAY = "today"
    SPECIFIC_DAY = "specific_day"
    FREE_DAYS = "free_days"
    WEEK = "week"
    TODAY_OVERVIEW = "today_overview"


@dataclass(frozen=True, slots=True)
class Rule:
    """One keyword predicate.

    Matches when every ``require`` phrase is present and then any ``keywords``
    phrase is present or ``pattern`` finds a match. ``match_empty`` makes an
    empty message match outright. All comparisons are substring checks on
    lowercased text.
    """

    label: Intent | Subcase
    keywords: tuple[str, ...] = ()
    require: tuple[str, ...] = ()
    pattern: re.Pattern[str] | None = None
    match_empty: bool = False

    def matches(self, text: str) -> bool:
        if self.match_empty and not text.strip():
            return True
        if not all(phrase in text for phrase in self.require):
            return False
        if not self.keywords and self.pattern is None:
            return bool(self.require)
        if any(phrase in text for phrase in self.keywords):
            return True
        return self.pattern is not None and self.pattern.search(text) is not None


@dataclass(frozen=True, slots=True)
class RoutingResult:
    """Routing decision for one message."""

    intent: Intent
    subcase: Subcase | None = None
    day: int | None = None  # Monday-indexed weekday named in the message
    text: str = ""  # Lowercased message the rules were evaluated against


_WEEKDAYS = tuple(d.lower() for d in DAYS)

_BUSIEST_PHRASES = (
    "busiest day",
    "most busy",
    "which day is busiest",
    "what is my busiest day",
    "when am i busiest",
)
_WORKLOAD_PHRASES = ("busy", "packed", "workload", "work load", "overall load")

INTENT_RULES: tuple[Rule, ...] = (
    Rule(
        Intent.NAME_QUERY,
        keywords=(
            "what is my name",
            "who am i",
            "do you know my name",
            "what's my name",
            "whats my name",
        ),
    ),
    Rule(Intent.EXPENSE_MONTHLY, require=("this month",), keywords=("spend", "expense")),
    Rule(
        Intent.EXPENSE_INSIGHTS,
        keywords=(
            "expense",
            "spend",
            "spent",
            "money",
            "budget",
            "cost",
            "expensive",
            "saving",
        ),
    ),
    Rule(Intent.ATTENDANCE_INSIGHTS, keywords=("attendance", "present", "absent", "percentage")),
    Rule(
        Intent.ACADEMIC_INSIGHTS,
        keywords=(
            "cgpa",
            "gpa",
            "grade",
            "sgpa",
            "semester",
            "marks",
            "performance",
            "result",
            "academic",
            "progress",
            "improvement",
            "trend",
        ),
    ),
    Rule(
        Intent.ASSIGNMENT_PLANNING,
        keywords=("assignment", "homework", "deadline", "due", "project"),
    ),
    Rule(
        Intent.CALENDAR_MANAGEMENT,
        keywords=("calendar", "event", "exam", "holiday", "important date", "meeting"),
    ),
    Rule(
        Intent.TIMETABLE_ANALYSIS,
        keywords=(
            "class",
            "lecture",
            "timetable",
            "schedule",
            "tomorrow",
            "today",
            *_WEEKDAYS,
            "free day",
            "off day",
            "day off",
            "week",
            "weekly",
            *_WORKLOAD_PHRASES,
            *_BUSIEST_PHRASES,
        ),
    ),
    Rule(Intent.GREETING, keywords=("hi", "hello", "hey"), match_empty=True),
    Rule(Intent.GRATITUDE, keywords=("thank", "thanks", "appreciate")),
)

SUBCASE_RULES: dict[Intent, tuple[Rule, ...]] = {
    Intent.ATTENDANCE_INSIGHTS: (
        Rule(
            Subcase.SUBJECT_BREAKDOWN,
            keywords=(
                "per subject",
                "by subject",
                "each subject",
                "subject wise",
                "subject-wise",
                "subject breakdown",
                "breakdown by subject",
            ),
        ),
        Rule(
            Subcase.LOWEST_SUBJECT,
            keywords=("which subject", "what subject"),
            pattern=re.compile(r"subject.*low|low.*subject|subject.*below|below.*subject"),
        ),
    ),
    Intent.ACADEMIC_INSIGHTS: (
        Rule(
            Subcase.ALL_SEMESTERS,
            keywords=(
                "all",
                "semester wise",
                "semester-wise",
                "each semester",
                "breakdown",
                "list",
                "show my grades",
                "show grades",
            ),
        ),
        Rule(Subcase.TREND, keywords=("trend", "progress", "improvement", "change")),
    ),
    Intent.ASSIGNMENT_PLANNING: (
        Rule(Subcase.DUE_THIS_WEEK, keywords=("week",)),
        Rule(Subcase.NEXT_DEADLINE, keywords=("next", "upcoming")),
    ),
    Intent.CALENDAR_MANAGEMENT: (
        Rule(Subcase.NEXT_HOLIDAY, keywords=("holiday",)),
        Rule(Subcase.NEXT_EXAM, keywords=("exam",)),
        Rule(Subcase.NEXT_MARK, keywords=("next", "upcoming")),
    ),
    Intent.TIMETABLE_ANALYSIS: (
        Rule(Subcase.BUSIEST_DAY, keywords=_BUSIEST_PHRASES),
        Rule(Subcase.WORKLOAD, keywords=_WORKLOAD_PHRASES),
        Rule(Subcase.TOMORROW, keywords=("tomorrow",)),
        Rule(Subcase.TODAY, keywords=("today",)),
        Rule(Subcase.SPECIFIC_DAY, keywords=_WEEKDAYS),
        Rule(Subcase.FREE_DAYS, keywords=("free", "off day", "day off", "which day")),
        Rule(Subcase.WEEK, keywords=("week", "weekly")),
    ),
}

# Sub-case used when no sub-case rule of the intent matches
DEFAULT_SUBCASES: dict[Intent, Subcase] = {
    Intent.ATTENDANCE_INSIGHTS: Subcase.OVERALL,
    Intent.ACADEMIC_INSIGHTS: Subcase.LATEST,
    Intent.ASSIGNMENT_PLANNING: Subcase.PENDING_SUMMARY,
    Intent.CALENDAR_MANAGEMENT: Subcase.ALL_UPCOMING,
    Intent.TIMETABLE_ANALYSIS: Subcase.TODAY_OVERVIEW,
}


def mentioned_day(text: str) -> int | None:
    """First weekday (Monday..Sunday order) named in lowercased text."""
    for index, name in enumerate(_WEEKDAYS):
        if name in text:
            return index
    return None


def _first_match(rules: tuple[Rule, ...], text: str) -> Rule | None:
    for rule in rules:
        if rule.matches(text):
            return rule
    return None


class MessageRouter:
    """Classifies chat messages into an intent and sub-case."""

    def __init__(
        self,
        intent_rules: tuple[Rule, ...] = INTENT_RULES,
        subcase_rules: dict[Intent, tuple[Rule, ...]] | None = None,
    ) -> None:
        self._intent_rules = intent_rules
        self._subcase_rules = SUBCASE_RULES if subcase_rules is None else subcase_rules

    def classify(self, message: str) -> RoutingResult:
        """Classify a sanitized message.

        Falls back to GUIDANCE when no intent rule matches; intents with
        sub-cases fall back to their default sub-case.
        """
        text = message.lower()

        matched = _first_match(self._intent_rules, text)
        if matched is None:
            return RoutingResult(intent=Intent.GUIDANCE, text=text)

        intent = Intent(matched.label)
        subcase = self._classify_subcase(intent, text)
        day = mentioned_day(text) if subcase is Subcase.SPECIFIC_DAY else None
        return RoutingResult(intent=intent, subcase=subcase, day=day, text=text)

    def _classify_subcase(self, intent: Intent, text: str) -> Subcase | None:
        rule = _first_match(self._subcase_rules.get(intent, ()), text)
        if rule is not None:
            return Subcase(rule.label)
        return DEFAULT_SUBCASES.get(intent)
