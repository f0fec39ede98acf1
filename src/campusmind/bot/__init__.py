"""Chat core — sanitize, classify, render, and wrap one message's reply."""

from campusmind.bot.envelope import AssistantResponse, DataUsed, ResponseMetadata
from campusmind.bot.responder import Responder, classify_and_respond
from campusmind.bot.router import Intent, MessageRouter, RoutingResult, Subcase

__all__ = [
    "AssistantResponse",
    "DataUsed",
    "Intent",
    "MessageRouter",
    "Responder",
    "ResponseMetadata",
    "RoutingResult",
    "Subcase",
    "classify_and_respond",
]
