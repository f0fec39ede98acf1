"""Small-talk handlers — name query, greeting, gratitude and the guidance fallback."""

from __future__ import annotations

from typing import TYPE_CHECKING

from campusmind.bot.voice import itemize, percent, plural
from campusmind.insights.timetable import classes_for_day
from campusmind.insights.timeutil import time_of_day_greeting, weekday_index

if TYPE_CHECKING:
    from campusmind.bot.handlers.context import ReplyContext

GUIDANCE_TEXT = (
    "I can help you check your schedule, assignments, attendance, expenses, or calendar. "
    "Just ask — like 'how busy is my week' or 'when's my next exam'."
)


def reply_name(ctx: ReplyContext) -> str:
    return f"Your name is {ctx.voice.user_name}. How can I help you today?"


def reply_greeting(ctx: ReplyContext) -> str:
    """Time-of-day greeting followed by a one-line-per-item status snapshot."""
    bundle, voice = ctx.bundle, ctx.voice
    classes_today = len(classes_for_day(bundle, weekday_index(ctx.now)))
    pending = bundle.pending_assignments
    attendance = bundle.attendance
    spent = bundle.expenses.this_month

    return itemize(
        [
            voice.greet(time_of_day_greeting(ctx.now)),
            (
                f"You have {classes_today} {plural(classes_today, 'class', 'es')} today."
                if classes_today
                else "You're free today — no classes scheduled."
            ),
            f"{pending} pending {plural(pending, 'assignment')}." if pending else None,
            (
                f"Attendance at {percent(attendance.effective_percentage)}%."
                if attendance.has_data
                else None
            ),
            f"Spent {voice.money(spent)} this month." if spent > 0 else None,
            "Let me know if you need anything specific.",
        ]
    )


def reply_gratitude(ctx: ReplyContext) -> str:
    return ctx.voice.address("Happy to help. Let me know if you need anything else.")


def reply_guidance(ctx: ReplyContext) -> str:
    return ctx.voice.address(GUIDANCE_TEXT)
