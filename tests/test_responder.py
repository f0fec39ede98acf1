"""End-to-end tests for Responder — classification plus every reply family."""

from __future__ import annotations

import logging
import random
from datetime import datetime
from typing import Any

import pytest

from campusmind.bot.responder import ERROR_REPLY, Responder, classify_and_respond
from campusmind.bot.router import Intent, RoutingResult
from campusmind.config import Settings


def ask(responder: Responder, bundle: dict[str, Any], message: str, now: datetime) -> str:
    return responder.respond({**bundle, "message": message}, now=now).reply


class TestScenarios:
    def test_name_query(self, named_responder: Responder, now: datetime) -> None:
        response = named_responder.respond(
            {"message": "what is my name", "user": {"firstName": "Asha"}}, now=now
        )
        assert response.intent is Intent.NAME_QUERY
        assert response.reply == "Your name is Asha. How can I help you today?"

    def test_attendance_below_threshold(self, responder: Responder, now: datetime) -> None:
        response = responder.respond(
            {
                "message": "attendance",
                "attendance": {"totalHeld": 40, "totalAttended": 28, "percentage": 70},
            },
            now=now,
        )
        assert response.intent is Intent.ATTENDANCE_INSIGHTS
        assert response.reply == (
            "Your attendance is at 70% (28/40 classes)."
            " This is below the 75% threshold — something to be mindful of."
            " You'd need to attend 2 more classes to reach 75%."
        )

    def test_empty_message_greets_default_name(
        self, named_responder: Responder, now: datetime
    ) -> None:
        response = named_responder.respond({"message": "", "user": {}}, now=now)
        assert response.intent is Intent.GREETING
        assert response.reply.startswith("Good morning, there.")

    def test_progress_trend(self, responder: Responder, now: datetime) -> None:
        response = responder.respond(
            {"message": "show my progress", "cgpa": [{"sgpa": 7.0}, {"sgpa": 7.8}]}, now=now
        )
        assert response.intent is Intent.ACADEMIC_INSIGHTS
        assert response.reply == (
            "Over 2 semesters, your grades have shown 📈 strong improvement."
            " Started at 7.00 → now at 7.80 (+0.80)."
            " Semester progression: 7.00 → 7.80"
        )


class TestSmallTalk:
    def test_greeting_snapshot(
        self, responder: Responder, bundle: dict[str, Any], now: datetime
    ) -> None:
        assert ask(responder, bundle, "hello", now) == (
            "Good morning.\n"
            "You have 2 classes today.\n"
            "6 pending assignments.\n"
            "Attendance at 70%.\n"
            "Spent ₹6000.00 this month.\n"
            "Let me know if you need anything specific."
        )

    def test_greeting_free_day_evening(self, responder: Responder) -> None:
        saturday_evening = datetime(2026, 10, 17, 19, 0)
        response = responder.respond({"message": "hey"}, now=saturday_evening)
        assert response.reply == (
            "Good evening.\n"
            "You're free today — no classes scheduled.\n"
            "Let me know if you need anything specific."
        )

    def test_gratitude_named(self, named_responder: Responder, now: datetime) -> None:
        response = named_responder.respond({"message": "thanks", "userName": "Ravi"}, now=now)
        assert response.intent is Intent.GRATITUDE
        assert response.reply == "Ravi, Happy to help. Let me know if you need anything else."

    def test_guidance(self, responder: Responder, now: datetime) -> None:
        response = responder.respond({"message": "blorp"}, now=now)
        assert response.intent is Intent.GUIDANCE
        assert response.reply.startswith("I can help you check your schedule")


class TestExpenseReplies:
    def test_monthly_moderate(
        self, responder: Responder, bundle: dict[str, Any], now: datetime
    ) -> None:
        assert ask(responder, bundle, "how much did I spend this month", now) == (
            "So far this month, you've spent ₹6000.00."
            " That's within a moderate range — nothing alarming."
        )

    @pytest.mark.parametrize(
        ("this_month", "opening"),
        [
            (12000, "You've spent ₹12000.00 this month, which is on the higher side."),
            (5000, "Your spending this month is at ₹5000.00."),
        ],
    )
    def test_monthly_bands(
        self, responder: Responder, now: datetime, this_month: float, opening: str
    ) -> None:
        response = responder.respond(
            {"message": "spend this month", "expenses": {"thisMonth": this_month}}, now=now
        )
        assert response.reply.startswith(opening)

    def test_monthly_no_data(self, responder: Responder, now: datetime) -> None:
        response = responder.respond({"message": "this month spend"}, now=now)
        assert response.reply == "I don't have any expense records for this month yet."

    def test_insights(self, responder: Responder, bundle: dict[str, Any], now: datetime) -> None:
        assert ask(responder, bundle, "where does my money go", now) == (
            "Overall, you've spent ₹20000.00 across all time, with ₹6000.00 so far this month."
            " Monthly spending is within a reasonable range."
            " Your main spending areas:"
            " • Food: ₹8000.00 (40.0% of total)"
            " • Books: ₹7000.00 (35.0% of total)"
        )

    def test_insights_no_data(self, responder: Responder, now: datetime) -> None:
        response = responder.respond({"message": "budget"}, now=now)
        assert response.reply.startswith("I don't have any expense records yet.")


class TestAttendanceReplies:
    def test_overall_offers_breakdown(
        self, responder: Responder, bundle: dict[str, Any], now: datetime
    ) -> None:
        reply = ask(responder, bundle, "my attendance", now)
        assert reply.endswith("Want to see the breakdown by subject? Just ask.")

    @pytest.mark.parametrize(
        ("pct", "tail"),
        [
            (80, "It's acceptable, though there's room to improve."),
            (92, "You're maintaining good attendance — that's solid."),
        ],
    )
    def test_overall_bands(
        self, responder: Responder, now: datetime, pct: float, tail: str
    ) -> None:
        response = responder.respond(
            {
                "message": "attendance",
                "attendance": {"totalHeld": 50, "totalAttended": 40, "percentage": pct},
            },
            now=now,
        )
        assert response.reply.endswith(tail)

    def test_breakdown(self, responder: Responder, bundle: dict[str, Any], now: datetime) -> None:
        assert ask(responder, bundle, "attendance per subject", now) == (
            "Here's your attendance by subject:\n"
            "⚠️ Physics: 50% (10/20)\n"
            "✓ Maths: 90% (18/20)\n"
            "\n"
            "Overall: 70% (28/40)"
        )

    def test_lowest_subject(
        self, responder: Responder, bundle: dict[str, Any], now: datetime
    ) -> None:
        assert ask(responder, bundle, "which subject has my lowest attendance", now) == (
            "Your lowest attendance is in Physics at 50% (10/20)."
            " You need to attend 5 more classes to reach 75%."
        )

    def test_lowest_subject_above_threshold(self, responder: Responder, now: datetime) -> None:
        response = responder.respond(
            {
                "message": "which subject attendance",
                "attendance": {
                    "totalHeld": 20,
                    "totalAttended": 18,
                    "subjects": {"Maths": {"attended": 8, "held": 10}},
                },
            },
            now=now,
        )
        assert response.reply == (
            "Your lowest attendance is in Maths at 80%, which is still above 75%."
        )

    def test_no_data(self, responder: Responder, now: datetime) -> None:
        response = responder.respond({"message": "attendance"}, now=now)
        assert response.reply.startswith("No attendance records yet.")


class TestAcademicReplies:
    def test_latest(self, responder: Responder, bundle: dict[str, Any], now: datetime) -> None:
        assert ask(responder, bundle, "what is my cgpa", now) == (
            "Your latest SGPA (Sem 2) is 7.80."
            " Your overall CGPA across 2 semesters is 7.40."
            " Want to see all semesters or grade trends? Just ask."
        )

    def test_latest_single_semester(self, responder: Responder, now: datetime) -> None:
        response = responder.respond({"message": "sgpa", "cgpa": [{"gpa": 8.25}]}, now=now)
        assert response.reply == "Your SGPA for Semester 1 is 8.25."

    def test_all_semesters(
        self, responder: Responder, bundle: dict[str, Any], now: datetime
    ) -> None:
        assert ask(responder, bundle, "show all my grades", now) == (
            "You have 2 semesters of data:\n"
            "  1. Sem 1: 7.00\n"
            "  2. Sem 2: 7.80\n"
            "\n"
            "Overall CGPA: 7.40"
        )

    def test_trend_needs_two_semesters(self, responder: Responder, now: datetime) -> None:
        response = responder.respond({"message": "grade trend", "cgpa": [{"sgpa": 7.1}]}, now=now)
        assert response.reply == (
            "Your current SGPA is 7.10. Add more semesters to see trends."
        )

    def test_long_history_skips_progression(self, responder: Responder, now: datetime) -> None:
        records = [{"sgpa": s} for s in (7.0, 7.0, 7.0, 7.0, 7.0)]
        response = responder.respond({"message": "grade trend", "cgpa": records}, now=now)
        assert "➡️ stable" in response.reply
        assert "progression" not in response.reply

    def test_no_records(self, responder: Responder, now: datetime) -> None:
        response = responder.respond({"message": "cgpa"}, now=now)
        assert response.reply.startswith("No academic records yet.")


class TestAssignmentReplies:
    def test_due_this_week(
        self, responder: Responder, bundle: dict[str, Any], now: datetime
    ) -> None:
        assert ask(responder, bundle, "assignments due this week", now) == (
            "Here's what's due this week:\n• 2026-10-16: 2 assignments (in 2 days)"
        )

    def test_nothing_due_this_week(self, responder: Responder, now: datetime) -> None:
        response = responder.respond(
            {"message": "assignments this week", "assignments": {"2026-11-30": 1}}, now=now
        )
        assert response.reply == "Nothing due this week — a good time to get ahead."

    def test_next_deadline(
        self, responder: Responder, bundle: dict[str, Any], now: datetime
    ) -> None:
        assert ask(responder, bundle, "next assignment", now) == (
            "Your next deadline is 2026-10-16 — 2 assignments due in 2 days."
        )

    def test_next_deadline_all_past(self, responder: Responder, now: datetime) -> None:
        response = responder.respond(
            {"message": "next deadline", "assignments": {"2026-10-01": 1}}, now=now
        )
        assert response.reply == "No upcoming deadlines on record."

    @pytest.mark.parametrize(
        ("message", "reply"),
        [
            ("next deadline", "No upcoming deadlines on record."),
            (
                "pending assignments",
                "You have 3 pending assignments. None of them has an upcoming date on record.",
            ),
        ],
    )
    def test_unparseable_dates_not_called_past(
        self, responder: Responder, now: datetime, message: str, reply: str
    ) -> None:
        response = responder.respond(
            {"message": message, "assignments": {"not-a-date": 3}}, now=now
        )
        assert response.reply == reply
        assert "past" not in response.reply

    def test_pending_summary(
        self, responder: Responder, bundle: dict[str, Any], now: datetime
    ) -> None:
        assert ask(responder, bundle, "pending assignments", now) == (
            "You have 6 pending assignments."
            " The nearest is on 2026-10-16 (2 assignments, in 2 days)."
        )

    def test_due_today(self, responder: Responder, now: datetime) -> None:
        response = responder.respond(
            {"message": "homework", "assignments": {"2026-10-14": 1}}, now=now
        )
        assert response.reply == (
            "You have 1 pending assignment. The nearest is on 2026-10-14 (1 assignment, today)."
        )

    def test_nothing_pending(self, responder: Responder, now: datetime) -> None:
        response = responder.respond(
            {"message": "homework", "assignments": {"2026-10-16": 0}}, now=now
        )
        assert response.reply == "No pending assignments at the moment."


class TestCalendarReplies:
    def test_next_holiday(
        self, responder: Responder, bundle: dict[str, Any], now: datetime
    ) -> None:
        assert ask(responder, bundle, "next holiday", now) == (
            "Your next holiday is on 2026-10-20 — 6 days to go."
        )

    def test_next_exam(self, responder: Responder, bundle: dict[str, Any], now: datetime) -> None:
        assert ask(responder, bundle, "when is my exam", now) == (
            "Your next exam is on 2026-11-02 — 19 days left."
        )

    def test_exam_today(self, responder: Responder, now: datetime) -> None:
        response = responder.respond(
            {
                "message": "exam",
                "calendarMarks": [{"date": "2026-10-14", "categoryName": "Lab Test"}],
            },
            now=now,
        )
        assert response.reply == "Your next exam is on 2026-10-14 — that's today."

    def test_next_mark(self, responder: Responder, bundle: dict[str, Any], now: datetime) -> None:
        assert ask(responder, bundle, "upcoming events", now) == (
            "Your next marked date is 2026-10-20 (Diwali Holiday) — in 6 days."
        )

    def test_all_upcoming(
        self, responder: Responder, bundle: dict[str, Any], now: datetime
    ) -> None:
        assert ask(responder, bundle, "show my calendar", now) == (
            "You have 2 upcoming dates:\n"
            "  1. 2026-10-20 — Diwali Holiday (in 6 days)\n"
            "  2. 2026-11-02 — Mid-term Exam (in 19 days)"
        )

    def test_uncategorized_mark_gets_label(self, responder: Responder, now: datetime) -> None:
        marks = [{"date": "2026-10-14", "categoryName": ""}, {"date": "2026-10-20"}]
        next_reply = responder.respond(
            {"message": "next event", "calendarMarks": marks}, now=now
        ).reply
        list_reply = responder.respond(
            {"message": "calendar", "calendarMarks": marks}, now=now
        ).reply
        assert next_reply == "Your next marked date is 2026-10-14 (Event) — today."
        assert list_reply == (
            "You have 2 upcoming dates:\n"
            "  1. 2026-10-14 — Event (today)\n"
            "  2. 2026-10-20 — Event (in 6 days)"
        )

    def test_no_holidays(self, responder: Responder, now: datetime) -> None:
        response = responder.respond(
            {
                "message": "holiday",
                "calendarMarks": [{"date": "2026-11-02", "categoryName": "Exam"}],
            },
            now=now,
        )
        assert response.reply == "No upcoming holidays scheduled."

    def test_only_past_marks(self, responder: Responder, now: datetime) -> None:
        response = responder.respond(
            {
                "message": "calendar",
                "calendarMarks": [{"date": "2026-10-01", "categoryName": "Fest"}],
            },
            now=now,
        )
        assert response.reply == "No upcoming dates in your calendar."

    def test_empty_calendar(self, responder: Responder, now: datetime) -> None:
        response = responder.respond({"message": "calendar"}, now=now)
        assert response.reply == "Your calendar is clear — no dates marked yet."


class TestTimetableReplies:
    @pytest.mark.parametrize(
        ("message", "reply"),
        [
            ("what's my busiest day", "Your busiest day is Tuesday with 3 classes."),
            ("classes tomorrow", "Tomorrow you have 3 classes: Physics, Maths, History."),
            ("what classes do I have today", "Today's schedule: 2 classes — Maths, Lab."),
            ("what's on friday", "On Friday: 1 class — Seminar."),
            ("what's on saturday", "Saturday is free — no classes scheduled."),
            ("any free days", "You're free on: Saturday, Sunday."),
            ("schedule", "Today: 2 classes — Maths, Lab."),
        ],
    )
    def test_reply(
        self,
        responder: Responder,
        bundle: dict[str, Any],
        now: datetime,
        message: str,
        reply: str,
    ) -> None:
        assert ask(responder, bundle, message, now) == reply

    def test_workload(self, responder: Responder, bundle: dict[str, Any], now: datetime) -> None:
        assert ask(responder, bundle, "how busy is my week", now) == (
            "You have 11 classes across 5 days this week."
            " That's quite a full week — make sure to pace yourself."
            " Your busiest day is Tuesday with 3 classes."
        )

    def test_light_workload(self, responder: Responder, now: datetime) -> None:
        response = responder.respond(
            {"message": "workload", "timetable": {"day_0": [{"name": "A"}]}}, now=now
        )
        assert "A lighter week" in response.reply

    def test_week(self, responder: Responder, bundle: dict[str, Any], now: datetime) -> None:
        assert ask(responder, bundle, "show my weekly schedule", now) == (
            "Here's your week:\n"
            "Monday: 2 classes\n"
            "Tuesday: 3 classes\n"
            "Wednesday (today): 2 classes\n"
            "Thursday: 3 classes\n"
            "Friday: 1 class\n"
            "Saturday: 0 classes\n"
            "Sunday: 0 classes"
        )

    def test_tomorrow_wraps_to_monday(self, responder: Responder, bundle: dict[str, Any]) -> None:
        sunday = datetime(2026, 10, 18, 10, 0)
        assert ask(responder, bundle, "tomorrow", sunday) == (
            "Tomorrow you have 2 classes: Maths, Physics."
        )

    @pytest.mark.parametrize(
        ("message", "reply"),
        [
            ("busiest day", "No classes scheduled this week."),
            ("weekly", "No classes scheduled this week — a completely free week."),
            ("today", "No classes today. A good day to catch up on work."),
            ("class", "No classes today. Want to know about tomorrow or the rest of the week?"),
        ],
    )
    def test_empty_timetable(
        self, responder: Responder, now: datetime, message: str, reply: str
    ) -> None:
        assert responder.respond({"message": message}, now=now).reply == reply


class TestEnvelope:
    def test_metadata(self, responder: Responder, bundle: dict[str, Any], now: datetime) -> None:
        response = responder.respond({**bundle, "message": "hello"}, now=now)
        assert response.metadata is not None
        assert response.metadata.timestamp == now
        assert response.metadata.user_name == "Asha"
        assert response.metadata.data_used.has_calendar is True
        assert response.error is None

    def test_same_input_same_output(self, bundle: dict[str, Any], now: datetime) -> None:
        settings = Settings(_env_file=None)
        request = {**bundle, "message": "my attendance"}
        first = Responder(settings, rng=random.Random(7)).respond(request, now=now)
        second = Responder(settings, rng=random.Random(7)).respond(request, now=now)
        assert first == second

    def test_sanitized_before_classifying(self, responder: Responder, now: datetime) -> None:
        response = responder.respond({"message": "<script>x</script>cgpa"}, now=now)
        assert response.intent is Intent.ACADEMIC_INSIGHTS

    def test_one_shot_wrapper(self, unnamed_rng: random.Random, now: datetime) -> None:
        response = classify_and_respond(
            {"message": "who am i", "userName": "Ravi"},
            settings=Settings(_env_file=None),
            rng=unnamed_rng,
            now=now,
        )
        assert response.reply == "Your name is Ravi. How can I help you today?"


class _ExplodingRouter:
    def classify(self, message: str) -> RoutingResult:
        raise RuntimeError("rule table corrupted")


class TestFailures:
    def test_malformed_bundle_gets_guidance(
        self, responder: Responder, now: datetime, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="campusmind.bot.responder"):
            response = responder.respond(
                {"message": "attendance", "attendance": {"totalHeld": -4}}, now=now
            )
        assert response.intent is Intent.GUIDANCE
        assert response.metadata is None
        assert "Malformed request bundle" in caplog.text

    def test_nested_nulls_do_not_reject_request(
        self, responder: Responder, now: datetime
    ) -> None:
        response = responder.respond(
            {
                "message": "what is my name",
                "user": {"firstName": "Asha"},
                "calendarMarks": [{"date": "2026-10-20", "categoryName": None}],
                "expenses": {"total": None, "thisMonth": 100},
            },
            now=now,
        )
        assert response.intent is Intent.NAME_QUERY
        assert response.reply == "Your name is Asha. How can I help you today?"

    def test_missing_message(self, responder: Responder, now: datetime) -> None:
        assert responder.respond({}, now=now).intent is Intent.GUIDANCE

    def test_unexpected_error_becomes_error_envelope(
        self, now: datetime, caplog: pytest.LogCaptureFixture
    ) -> None:
        settings = Settings(_env_file=None)
        responder = Responder(settings, router=_ExplodingRouter())  # type: ignore[arg-type]
        with caplog.at_level(logging.ERROR, logger="campusmind.bot.responder"):
            response = responder.respond({"message": "hi"}, now=now)
        assert response.intent is Intent.ERROR
        assert response.reply == ERROR_REPLY
        assert response.error is None
        assert "Failed to answer message" in caplog.text

    def test_debug_exposes_error(self, now: datetime) -> None:
        settings = Settings(_env_file=None, debug=True)
        responder = Responder(settings, router=_ExplodingRouter())  # type: ignore[arg-type]
        response = responder.respond({"message": "hi"}, now=now)
        assert response.error == "rule table corrupted"
        assert response.to_wire()["error"] == "rule table corrupted"
