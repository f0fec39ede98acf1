"""Academic handlers — latest SGPA, semester listing, grade trend."""

from __future__ import annotations

from typing import TYPE_CHECKING

from campusmind.bot.router import Subcase
from campusmind.bot.voice import itemize, paragraph, plural, score
from campusmind.insights.grades import (
    TREND_ICONS,
    cumulative_average,
    grade_trend,
    resolve_score,
    semester_label,
)

if TYPE_CHECKING:
    from campusmind.bot.handlers.context import ReplyContext


def reply_academics(ctx: ReplyContext) -> str:
    if not ctx.bundle.cgpa:
        return ctx.voice.address(
            "No academic records yet. Add your semester grades and I can track your progress."
        )

    subcase = ctx.routing.subcase
    if subcase is Subcase.ALL_SEMESTERS:
        return _all_semesters(ctx)
    if subcase is Subcase.TREND:
        return _trend(ctx)
    return _latest(ctx)


def _all_semesters(ctx: ReplyContext) -> str:
    records = ctx.bundle.cgpa
    lines = [f"You have {len(records)} {plural(len(records), 'semester')} of data:"]
    lines.extend(
        f"  {i}. {semester_label(record, i)}: {score(resolve_score(record))}"
        for i, record in enumerate(records, start=1)
    )
    average = cumulative_average(records)
    if average is not None:
        lines.append(f"\nOverall CGPA: {score(average)}")
    return itemize(lines)


def _trend(ctx: ReplyContext) -> str:
    records = ctx.bundle.cgpa
    trend = grade_trend(records)
    if trend is None:
        return ctx.voice.address(
            f"Your current SGPA is {score(resolve_score(records[0]))}. "
            "Add more semesters to see trends."
        )

    sign = "+" if trend.difference > 0 else ""
    parts = [
        f"Over {trend.semesters} semesters, your grades have shown"
        f" {TREND_ICONS[trend.band]} {trend.band}.",
        f"Started at {score(trend.first)} → now at {score(trend.latest)}"
        f" ({sign}{score(trend.difference)}).",
    ]
    if len(records) <= ctx.config.progression_max_semesters:
        progression = " → ".join(score(resolve_score(r)) for r in records)
        parts.append(f"Semester progression: {progression}")
    return ctx.voice.address(paragraph(parts))


def _latest(ctx: ReplyContext) -> str:
    records, voice = ctx.bundle.cgpa, ctx.voice
    latest = records[-1]
    label = semester_label(latest, len(records))
    sgpa = score(resolve_score(latest))

    average = cumulative_average(records)
    if average is None:
        return voice.address(f"Your SGPA for {label} is {sgpa}.")

    return paragraph(
        [
            voice.address(f"Your latest SGPA ({label}) is {sgpa}."),
            f"Your overall CGPA across {len(records)} semesters is {score(average)}.",
            "Want to see all semesters or grade trends? Just ask.",
        ]
    )
