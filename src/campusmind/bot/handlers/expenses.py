"""Expense handlers — this month's spend and overall spending insights."""

from __future__ import annotations

from typing import TYPE_CHECKING

from campusmind.bot.voice import paragraph
from campusmind.insights.expenses import top_categories

if TYPE_CHECKING:
    from campusmind.bot.handlers.context import ReplyContext


def reply_monthly(ctx: ReplyContext) -> str:
    expenses, voice, config = ctx.bundle.expenses, ctx.voice, ctx.config
    if not expenses.has_monthly:
        return voice.address("I don't have any expense records for this month yet.")

    spending = voice.money(expenses.this_month)
    if expenses.this_month > config.high_spend:
        return paragraph(
            [
                f"You've spent {spending} this month, which is on the higher side.",
                "Might be worth reviewing where the money's going"
                " — especially discretionary spending.",
            ]
        )
    if expenses.this_month > config.moderate_spend:
        return paragraph(
            [
                f"So far this month, you've spent {spending}.",
                "That's within a moderate range — nothing alarming.",
            ]
        )
    return paragraph(
        [
            f"Your spending this month is at {spending}.",
            "Looks like you're keeping things under control.",
        ]
    )


def reply_insights(ctx: ReplyContext) -> str:
    """Totals, a pace remark, and the largest categories with their share."""
    expenses, voice, config = ctx.bundle.expenses, ctx.voice, ctx.config
    if not expenses.has_data:
        return voice.address(
            "I don't have any expense records yet. "
            "Start tracking your spending and I can help you manage your budget."
        )

    this_month = expenses.this_month
    parts: list[str | None] = [
        f"Overall, you've spent {voice.money(expenses.total)} across all time, "
        f"with {voice.money(this_month)} so far this month."
    ]

    if this_month > config.high_spend:
        parts.append("This month's spending is a bit elevated — worth keeping an eye on.")
    elif this_month > config.moderate_spend:
        parts.append("Monthly spending is within a reasonable range.")
    elif this_month > 0:
        parts.append("You're spending at a comfortable pace right now.")

    top = top_categories(expenses, limit=config.top_expense_categories)
    if top:
        parts.append("Your main spending areas:")
        parts.extend(
            f"• {c.name}: {voice.money(c.amount)} ({c.share:.1f}% of total)" for c in top
        )

    return voice.address(paragraph(parts))
