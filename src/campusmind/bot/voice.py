"""Reply rendering — paragraph/list joining, number formats, and name personalization.

Personalization is a coin flip per reply. The random source is passed in, so
tests can pin either branch with a seeded or stubbed ``random.Random``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import random
    from collections.abc import Iterable

    from campusmind.config import AssistantConfig


def paragraph(fragments: Iterable[str | None]) -> str:
    """Join non-empty fragments into prose, separated by single spaces."""
    return " ".join(f for f in fragments if f)


def itemize(lines: Iterable[str | None]) -> str:
    """Join non-empty lines into a list, one per line."""
    return "\n".join(line for line in lines if line)


def plural(count: int, singular: str, suffix: str = "s") -> str:
    """``plural(1, "class", "es")`` → ``"class"``; any other count adds the suffix."""
    return singular if count == 1 else singular + suffix


def score(value: float) -> str:
    return f"{value:.2f}"


def percent(value: float) -> str:
    """Percent without trailing zeros: 70.0 → ``"70"``, 72.456 → ``"72.46"``."""
    return f"{round(value, 2):g}"


def relative_days(days: int) -> str:
    """``0`` → ``"today"``, ``1`` → ``"in 1 day"``, ``5`` → ``"in 5 days"``."""
    if days == 0:
        return "today"
    return f"in {days} {plural(days, 'day')}"


class Voice:
    """Renders text for one user with probabilistic name usage."""

    def __init__(self, user_name: str, config: AssistantConfig, rng: random.Random) -> None:
        self.user_name = user_name
        self._config = config
        self._rng = rng

    def money(self, amount: float) -> str:
        return f"{self._config.currency_symbol}{amount:.2f}"

    def address(self, text: str) -> str:
        """Prefix the user's name on a ``name_probability`` draw."""
        if self._rng.random() < self._config.name_probability:
            return f"{self.user_name}, {text}"
        return text

    def greet(self, salutation: str) -> str:
        """``"Good morning, Asha."`` on a ``greeting_name_probability`` draw.

        Otherwise just ``"Good morning."``.
        """
        if self._rng.random() < self._config.greeting_name_probability:
            return f"{salutation}, {self.user_name}."
        return f"{salutation}."
