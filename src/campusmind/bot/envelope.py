"""Response envelope — intent, reply text and diagnostic metadata."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from campusmind.bot.router import Intent

if TYPE_CHECKING:
    from campusmind.data.models import RequestBundle


class _EnvelopeModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class DataUsed(_EnvelopeModel):
    """Which input categories carried data. Diagnostic only."""

    has_expenses: bool = False
    has_attendance: bool = False
    has_timetable: bool = False
    has_assignments: bool = False
    has_calendar: bool = False
    has_cgpa: bool = False


class ResponseMetadata(_EnvelopeModel):
    timestamp: datetime
    user_name: str
    data_used: DataUsed


class AssistantResponse(_EnvelopeModel):
    """What the caller gets back for one message."""

    intent: Intent
    reply: str
    metadata: ResponseMetadata | None = None
    error: str | None = None  # Populated in debug mode only

    def to_wire(self) -> dict[str, Any]:
        """camelCase JSON-ready dict, omitting empty optional blocks."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def describe_data(bundle: RequestBundle) -> DataUsed:
    return DataUsed(
        has_expenses=bundle.expenses.has_data,
        has_attendance=bundle.attendance.has_data,
        has_timetable=any(bundle.timetable.values()),
        has_assignments=bundle.pending_assignments > 0,
        has_calendar=bool(bundle.calendar_marks),
        has_cgpa=bool(bundle.cgpa),
    )


def build_envelope(
    intent: Intent,
    reply: str,
    bundle: RequestBundle,
    now: datetime,
) -> AssistantResponse:
    return AssistantResponse(
        intent=intent,
        reply=reply,
        metadata=ResponseMetadata(
            timestamp=now,
            user_name=bundle.resolved_user_name,
            data_used=describe_data(bundle),
        ),
    )
