"""Assignment handlers — due this week, next deadline, pending summary."""

from __future__ import annotations

from typing import TYPE_CHECKING

from campusmind.bot.router import Subcase
from campusmind.bot.voice import itemize, paragraph, plural, relative_days
from campusmind.insights.assignments import due_within, upcoming_deadlines

if TYPE_CHECKING:
    from campusmind.bot.handlers.context import ReplyContext


def reply_assignments(ctx: ReplyContext) -> str:
    bundle, voice = ctx.bundle, ctx.voice
    pending = bundle.pending_assignments
    if pending == 0:
        return voice.address("No pending assignments at the moment.")

    subcase = ctx.routing.subcase
    if subcase is Subcase.DUE_THIS_WEEK:
        due = due_within(bundle.assignments, ctx.now, days=ctx.config.due_window_days)
        if not due:
            return voice.address("Nothing due this week — a good time to get ahead.")
        lines = ["Here's what's due this week:"]
        lines.extend(
            f"• {d.label}: {d.count} {plural(d.count, 'assignment')}"
            f" ({relative_days(d.days_until)})"
            for d in due
        )
        return itemize(lines)

    upcoming = upcoming_deadlines(bundle.assignments, ctx.now)

    if subcase is Subcase.NEXT_DEADLINE:
        if not upcoming:
            return voice.address("No upcoming deadlines on record.")
        nxt = upcoming[0]
        return voice.address(
            f"Your next deadline is {nxt.label} — {nxt.count} {plural(nxt.count, 'assignment')}"
            f" due {relative_days(nxt.days_until)}."
        )

    summary = f"You have {pending} pending {plural(pending, 'assignment')}."
    if not upcoming:
        return voice.address(
            paragraph([summary, "None of them has an upcoming date on record."])
        )
    nearest = upcoming[0]
    return voice.address(
        paragraph(
            [
                summary,
                f"The nearest is on {nearest.label}"
                f" ({nearest.count} {plural(nearest.count, 'assignment')},"
                f" {relative_days(nearest.days_until)}).",
            ]
        )
    )
