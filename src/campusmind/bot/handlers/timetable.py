"""Timetable handlers — busiest day, workload, a given day, free days, the week."""

from __future__ import annotations

from typing import TYPE_CHECKING

from campusmind.bot.router import Subcase
from campusmind.bot.voice import itemize, paragraph, plural
from campusmind.insights.timetable import analyze_week, classes_for_day
from campusmind.insights.timeutil import DAYS, day_name, weekday_index

if TYPE_CHECKING:
    from campusmind.bot.handlers.context import ReplyContext
    from campusmind.data.models import ClassEntry


def _class_count(count: int) -> str:
    return f"{count} {plural(count, 'class', 'es')}"


def _class_list(classes: list[ClassEntry]) -> str:
    return ", ".join(c.display_name for c in classes)


def reply_timetable(ctx: ReplyContext) -> str:
    bundle, voice = ctx.bundle, ctx.voice
    today = weekday_index(ctx.now)
    subcase = ctx.routing.subcase

    if subcase is Subcase.BUSIEST_DAY:
        busiest = analyze_week(bundle).busiest
        if busiest is None:
            return voice.address("No classes scheduled this week.")
        return voice.address(
            f"Your busiest day is {day_name(busiest.day)} with {_class_count(busiest.count)}."
        )

    if subcase is Subcase.WORKLOAD:
        return _workload(ctx)

    if subcase is Subcase.TOMORROW:
        classes = classes_for_day(bundle, (today + 1) % len(DAYS))
        if not classes:
            return voice.address("No classes tomorrow — you're free.")
        return voice.address(
            f"Tomorrow you have {_class_count(len(classes))}: {_class_list(classes)}."
        )

    if subcase is Subcase.TODAY:
        classes = classes_for_day(bundle, today)
        if not classes:
            return voice.address("No classes today. A good day to catch up on work.")
        return voice.address(
            f"Today's schedule: {_class_count(len(classes))} — {_class_list(classes)}."
        )

    if subcase is Subcase.SPECIFIC_DAY and ctx.routing.day is not None:
        day = ctx.routing.day
        classes = classes_for_day(bundle, day)
        if not classes:
            return voice.address(f"{day_name(day)} is free — no classes scheduled.")
        return voice.address(
            f"On {day_name(day)}: {_class_count(len(classes))} — {_class_list(classes)}."
        )

    if subcase is Subcase.FREE_DAYS:
        free = analyze_week(bundle).free_days
        if not free:
            return voice.address("You have classes every day this week — no full free days.")
        return voice.address(f"You're free on: {', '.join(day_name(d) for d in free)}.")

    if subcase is Subcase.WEEK:
        return _week(ctx, today)

    classes = classes_for_day(bundle, today)
    if not classes:
        return voice.address(
            "No classes today. Want to know about tomorrow or the rest of the week?"
        )
    return voice.address(f"Today: {_class_count(len(classes))} — {_class_list(classes)}.")


def _workload(ctx: ReplyContext) -> str:
    week, config = analyze_week(ctx.bundle), ctx.config
    if week.total_classes == 0:
        return ctx.voice.address("No classes scheduled this week — you're completely free.")

    parts = [
        f"You have {_class_count(week.total_classes)} across {week.days_with_classes}"
        f" {plural(week.days_with_classes, 'day')} this week."
    ]
    if week.total_classes >= config.busy_week_classes:
        parts.append("That's quite a full week — make sure to pace yourself.")
    elif week.total_classes >= config.moderate_week_classes:
        parts.append("A moderate week — manageable with good planning.")
    else:
        parts.append("A lighter week — good time to get ahead on other work.")

    if week.busiest is not None:
        parts.append(
            f"Your busiest day is {day_name(week.busiest.day)}"
            f" with {_class_count(week.busiest.count)}."
        )
    return ctx.voice.address(paragraph(parts))


def _week(ctx: ReplyContext, today: int) -> str:
    week = analyze_week(ctx.bundle)
    if week.total_classes == 0:
        return ctx.voice.address("No classes scheduled this week — a completely free week.")

    lines = ["Here's your week:"]
    for day, count in enumerate(week.counts):
        marker = " (today)" if day == today else ""
        lines.append(f"{day_name(day)}{marker}: {_class_count(count)}")
    return itemize(lines)
