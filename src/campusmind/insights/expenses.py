"""Expense ranking by category."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from campusmind.data.models import ExpenseSummary


@dataclass(frozen=True, slots=True)
class CategoryShare:
    name: str
    amount: float
    share: float  # Percent of the all-time total; 0 when total is 0


def top_categories(expenses: ExpenseSummary, limit: int = 2) -> list[CategoryShare]:
    """Largest spending categories first, with each one's share of the total."""
    ranked = sorted(expenses.categories.items(), key=lambda item: item[1], reverse=True)
    total = expenses.total
    return [
        CategoryShare(
            name=name,
            amount=amount,
            share=(amount / total * 100) if total > 0 else 0.0,
        )
        for name, amount in ranked[:limit]
    ]
