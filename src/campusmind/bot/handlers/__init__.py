"""Handler package — one reply module per intent family.

``HANDLERS`` maps every classifiable intent to the function that renders its
reply; ``render_reply`` dispatches through it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from campusmind.bot.handlers.academics import reply_academics
from campusmind.bot.handlers.assignments import reply_assignments
from campusmind.bot.handlers.attendance import reply_attendance
from campusmind.bot.handlers.calendar import reply_calendar
from campusmind.bot.handlers.context import ReplyContext
from campusmind.bot.handlers.expenses import reply_insights, reply_monthly
from campusmind.bot.handlers.small_talk import (
    reply_gratitude,
    reply_greeting,
    reply_guidance,
    reply_name,
)
from campusmind.bot.handlers.timetable import reply_timetable
from campusmind.bot.router import Intent

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = ["HANDLERS", "ReplyContext", "render_reply"]

HANDLERS: dict[Intent, Callable[[ReplyContext], str]] = {
    Intent.NAME_QUERY: reply_name,
    Intent.EXPENSE_MONTHLY: reply_monthly,
    Intent.EXPENSE_INSIGHTS: reply_insights,
    Intent.ATTENDANCE_INSIGHTS: reply_attendance,
    Intent.ACADEMIC_INSIGHTS: reply_academics,
    Intent.ASSIGNMENT_PLANNING: reply_assignments,
    Intent.CALENDAR_MANAGEMENT: reply_calendar,
    Intent.TIMETABLE_ANALYSIS: reply_timetable,
    Intent.GREETING: reply_greeting,
    Intent.GRATITUDE: reply_gratitude,
    Intent.GUIDANCE: reply_guidance,
}


def render_reply(ctx: ReplyContext) -> str:
    return HANDLERS[ctx.routing.intent](ctx)
