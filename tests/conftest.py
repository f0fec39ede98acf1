"""Shared fixtures: a pinned clock, pinned personalization draws, sample data."""

from __future__ import annotations

import random
from datetime import datetime
from typing import Any

import pytest

from campusmind.bot.responder import Responder
from campusmind.config import Settings

# Wednesday morning
NOW = datetime(2026, 10, 14, 9, 30)


class FixedDraw(random.Random):
    """Random source whose ``random()`` always returns the same value."""

    def __init__(self, value: float) -> None:
        super().__init__(0)
        self._value = value

    def random(self) -> float:
        return self._value


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def named_rng() -> random.Random:
    """Every personalization draw includes the name."""
    return FixedDraw(0.0)


@pytest.fixture
def unnamed_rng() -> random.Random:
    """No personalization draw includes the name."""
    return FixedDraw(0.99)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def responder(settings: Settings, unnamed_rng: random.Random) -> Responder:
    """Responder that never personalizes, so replies are exact."""
    return Responder(settings, rng=unnamed_rng)


@pytest.fixture
def named_responder(settings: Settings, named_rng: random.Random) -> Responder:
    return Responder(settings, rng=named_rng)


@pytest.fixture
def timetable() -> dict[str, list[dict[str, str]]]:
    """Mon 2, Tue 3, Wed 2, Thu 3, Fri 1, weekend free."""
    return {
        "day_0": [{"name": "Maths"}, {"name": "Physics"}],
        "day_1": [{"name": "Chemistry"}, {"subject": "Biology"}, {"name": "English"}],
        "day_2": [
            {"name": "Maths", "startTime": "09:00", "endTime": "10:00"},
            {"name": "Lab", "time": "14:00 - 16:00"},
        ],
        "day_3": [{"name": "Physics"}, {"name": "Maths"}, {"name": "History"}],
        "day_4": [{"name": "Seminar"}],
    }


@pytest.fixture
def bundle(timetable: dict[str, list[dict[str, str]]]) -> dict[str, Any]:
    """A fully populated request bundle, camelCase as it arrives on the wire."""
    return {
        "message": "",
        "user": {"firstName": "Asha"},
        "assignments": {"2026-10-16": 2, "2026-10-25": 1, "2026-10-01": 3},
        "timetable": timetable,
        "todayIndex": 2,
        "cgpa": [{"sgpa": 7.0, "semester": "Sem 1"}, {"sgpa": 7.8, "semester": "Sem 2"}],
        "calendarMarks": [
            {"date": "2026-11-02", "categoryName": "Mid-term Exam"},
            {"date": "2026-10-20", "categoryName": "Diwali Holiday"},
            {"date": "2026-10-01", "categoryName": "Past Event"},
        ],
        "attendance": {
            "totalHeld": 40,
            "totalAttended": 28,
            "percentage": 70,
            "subjects": {
                "Maths": {"attended": 18, "held": 20, "percentage": 90},
                "Physics": {"attended": 10, "held": 20, "percentage": 50},
            },
        },
        "expenses": {
            "total": 20000,
            "thisMonth": 6000,
            "categories": {"Food": 8000, "Travel": 5000, "Books": 7000},
        },
    }
