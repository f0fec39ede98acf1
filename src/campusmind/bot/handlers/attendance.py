"""Attendance handlers — overall standing, per-subject breakdown, lowest subject."""

from __future__ import annotations

from typing import TYPE_CHECKING

from campusmind.bot.router import Subcase
from campusmind.bot.voice import itemize, paragraph, percent, plural
from campusmind.insights.attendance import (
    AttendanceBand,
    attendance_band,
    classes_needed,
    lowest_subject,
    subject_breakdown,
)

if TYPE_CHECKING:
    from campusmind.bot.handlers.context import ReplyContext


def reply_attendance(ctx: ReplyContext) -> str:
    if not ctx.bundle.attendance.has_data:
        return ctx.voice.address(
            "No attendance records yet. Once classes start, I can help you track it."
        )

    subcase = ctx.routing.subcase
    if subcase is Subcase.SUBJECT_BREAKDOWN:
        return _subject_breakdown(ctx)
    if subcase is Subcase.LOWEST_SUBJECT:
        return _lowest_subject(ctx)
    return _overall(ctx)


def _overall(ctx: ReplyContext) -> str:
    attendance, config = ctx.bundle.attendance, ctx.config
    pct = attendance.effective_percentage
    held, attended = attendance.total_held, attendance.total_attended
    threshold = percent(config.attendance_threshold)

    parts: list[str | None] = [
        f"Your attendance is at {percent(pct)}% ({attended}/{held} classes)."
    ]

    band = attendance_band(pct, config.attendance_threshold, config.attendance_good)
    if band is AttendanceBand.BELOW:
        parts.append(f"This is below the {threshold}% threshold — something to be mindful of.")
        needed = classes_needed(held, attended, config.attendance_ratio)
        if needed > 0:
            parts.append(
                f"You'd need to attend {needed} more {plural(needed, 'class', 'es')} "
                f"to reach {threshold}%."
            )
        if attendance.subjects:
            parts.append("Want to see the breakdown by subject? Just ask.")
    elif band is AttendanceBand.ACCEPTABLE:
        parts.append("It's acceptable, though there's room to improve.")
    else:
        parts.append("You're maintaining good attendance — that's solid.")

    return ctx.voice.address(paragraph(parts))


def _subject_breakdown(ctx: ReplyContext) -> str:
    attendance, config = ctx.bundle.attendance, ctx.config
    if not attendance.subjects:
        return ctx.voice.address("No subject-wise attendance data available.")

    lines = ["Here's your attendance by subject:"]
    standings = subject_breakdown(
        attendance.subjects, config.attendance_threshold, config.attendance_good
    )
    for s in standings:
        line = f"{s.name}: {percent(s.percentage)}% ({s.attended}/{s.held})"
        lines.append(f"{s.marker} {line}" if s.marker else line)

    lines.append(
        f"\nOverall: {percent(attendance.effective_percentage)}%"
        f" ({attendance.total_attended}/{attendance.total_held})"
    )
    return itemize(lines)


def _lowest_subject(ctx: ReplyContext) -> str:
    attendance, config, voice = ctx.bundle.attendance, ctx.config, ctx.voice
    if not attendance.subjects:
        return voice.address("No subject-wise data available.")

    lowest = lowest_subject(
        attendance.subjects, config.attendance_threshold, config.attendance_good
    )
    if lowest is None:
        return voice.address("None of your subjects have classes recorded yet.")

    threshold = percent(config.attendance_threshold)
    if lowest.percentage < config.attendance_threshold:
        needed = classes_needed(lowest.held, lowest.attended, config.attendance_ratio)
        return voice.address(
            f"Your lowest attendance is in {lowest.name} at {percent(lowest.percentage)}%"
            f" ({lowest.attended}/{lowest.held})."
            f" You need to attend {needed} more {plural(needed, 'class', 'es')}"
            f" to reach {threshold}%."
        )
    return voice.address(
        f"Your lowest attendance is in {lowest.name} at {percent(lowest.percentage)}%,"
        f" which is still above {threshold}%."
    )
