"""Calendar handlers — next holiday, next exam, next mark, all upcoming marks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from campusmind.bot.router import Subcase
from campusmind.bot.voice import itemize, plural, relative_days
from campusmind.insights.calendar import exams, future_marks, holidays

if TYPE_CHECKING:
    from campusmind.bot.handlers.context import ReplyContext


def _countdown(days: int, tail: str) -> str:
    if days == 0:
        return "that's today"
    return f"{days} {plural(days, 'day')} {tail}"


def reply_calendar(ctx: ReplyContext) -> str:
    voice = ctx.voice
    if not ctx.bundle.calendar_marks:
        return voice.address("Your calendar is clear — no dates marked yet.")

    upcoming = future_marks(ctx.bundle.calendar_marks, ctx.now)
    subcase = ctx.routing.subcase

    if subcase is Subcase.NEXT_HOLIDAY:
        found = holidays(upcoming)
        if not found:
            return voice.address("No upcoming holidays scheduled.")
        nxt = found[0]
        return voice.address(
            f"Your next holiday is on {nxt.label} — {_countdown(nxt.days_until, 'to go')}."
        )

    if subcase is Subcase.NEXT_EXAM:
        found = exams(upcoming)
        if not found:
            return voice.address("No upcoming exams in your calendar.")
        nxt = found[0]
        return voice.address(
            f"Your next exam is on {nxt.label} — {_countdown(nxt.days_until, 'left')}."
        )

    if not upcoming:
        return voice.address("No upcoming dates in your calendar.")

    if subcase is Subcase.NEXT_MARK:
        nxt = upcoming[0]
        return voice.address(
            f"Your next marked date is {nxt.label} ({nxt.category})"
            f" — {relative_days(nxt.days_until)}."
        )

    lines = [f"You have {len(upcoming)} upcoming {plural(len(upcoming), 'date')}:"]
    lines.extend(
        f"  {i}. {m.label} — {m.category} ({relative_days(m.days_until)})"
        for i, m in enumerate(upcoming, start=1)
    )
    return itemize(lines)
