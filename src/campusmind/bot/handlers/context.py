"""Shared context dataclass for all reply handler modules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from campusmind.bot.router import RoutingResult
    from campusmind.bot.voice import Voice
    from campusmind.config import AssistantConfig
    from campusmind.data.models import RequestBundle


@dataclass(frozen=True)
class ReplyContext:
    bundle: RequestBundle
    routing: RoutingResult
    now: datetime  # Single reference instant for the whole request
    config: AssistantConfig
    voice: Voice
