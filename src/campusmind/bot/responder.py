"""Responder — classify one message and answer it from the request's own data.

This is the boundary the chat surface calls. It never raises: malformed
bundles get the guidance reply and unexpected failures become an ``ERROR``
envelope, with the cause logged for operators and exposed only in debug mode.
"""

from __future__ import annotations

import logging
import random
from datetime import datetime
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from campusmind.bot.envelope import AssistantResponse, build_envelope
from campusmind.bot.handlers import ReplyContext, render_reply
from campusmind.bot.handlers.small_talk import GUIDANCE_TEXT
from campusmind.bot.router import Intent, MessageRouter
from campusmind.bot.sanitize import sanitize_message
from campusmind.bot.voice import Voice
from campusmind.config import Settings
from campusmind.data.models import RequestBundle

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

ERROR_REPLY = "Something went wrong. Could you try that again?"


class Responder:
    """Turns a request bundle into an ``AssistantResponse``.

    Holds only immutable settings, the rule tables and a random source, so one
    instance can serve concurrent requests.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        rng: random.Random | None = None,
        router: MessageRouter | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._rng = rng or random.Random()
        self._router = router or MessageRouter()

    def respond(
        self,
        request: RequestBundle | Mapping[str, Any],
        *,
        now: datetime | None = None,
    ) -> AssistantResponse:
        """Answer one message. ``now`` pins "today" for every date computation."""
        now = now or datetime.now()

        try:
            bundle = (
                request
                if isinstance(request, RequestBundle)
                else RequestBundle.model_validate(request)
            )
        except ValidationError as e:
            logger.warning("Malformed request bundle (%d errors): %s", e.error_count(), e)
            return AssistantResponse(intent=Intent.GUIDANCE, reply=GUIDANCE_TEXT)

        try:
            return self._answer(bundle, now)
        except Exception as e:
            logger.exception("Failed to answer message")
            return AssistantResponse(
                intent=Intent.ERROR,
                reply=ERROR_REPLY,
                error=str(e) if self._settings.debug else None,
            )

    def _answer(self, bundle: RequestBundle, now: datetime) -> AssistantResponse:
        config = self._settings.assistant
        san = sanitize_message(bundle.message, max_length=config.max_message_length)
        user_name = bundle.resolved_user_name

        logger.debug(
            "Received query from %s: %r (marks=%d, semesters=%d, subjects=%d)",
            user_name,
            san.text[:50],
            len(bundle.calendar_marks),
            len(bundle.cgpa),
            len(bundle.attendance.subjects),
        )

        routing = self._router.classify(san.text)
        ctx = ReplyContext(
            bundle=bundle,
            routing=routing,
            now=now,
            config=config,
            voice=Voice(user_name, config, self._rng),
        )
        reply = render_reply(ctx)

        logger.debug(
            "Answered with intent=%s subcase=%s (%d chars)",
            routing.intent,
            routing.subcase,
            len(reply),
        )
        return build_envelope(routing.intent, reply, bundle, now)


def classify_and_respond(
    request: RequestBundle | Mapping[str, Any],
    *,
    settings: Settings | None = None,
    rng: random.Random | None = None,
    now: datetime | None = None,
) -> AssistantResponse:
    """One-shot convenience wrapper around ``Responder.respond``."""
    return Responder(settings, rng=rng).respond(request, now=now)
