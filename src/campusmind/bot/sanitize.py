"""Input sanitization for incoming chat messages.

Strips null bytes, script blocks, ``javascript:`` and inline event-handler
fragments, removes angle brackets, trims whitespace and truncates to the
message length limit. Every modification is recorded as a flag.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 500

_SCRIPT_BLOCK = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_JS_SCHEME = re.compile(r"javascript:", re.IGNORECASE)
_EVENT_HANDLER = re.compile(r"\son\w+=", re.IGNORECASE)
_ANGLE_BRACKETS = re.compile(r"[<>]")


@dataclass(frozen=True)
class SanitizationResult:
    """Result of sanitizing a chat message."""

    text: str
    was_modified: bool
    flags: list[str] = field(default_factory=list)


def sanitize_message(text: str, *, max_length: int = MAX_MESSAGE_LENGTH) -> SanitizationResult:
    """Sanitize a chat message.

    - Strips null bytes
    - Removes script blocks, ``javascript:`` and ``on<event>=`` fragments
    - Removes ``<`` and ``>``
    - Strips leading/trailing whitespace
    - Truncates to max_length
    """
    flags: list[str] = []
    original = text

    if "\x00" in text:
        text = text.replace("\x00", "")
        flags.append("null_bytes_stripped")

    for pattern, flag in (
        (_SCRIPT_BLOCK, "script_removed"),
        (_JS_SCHEME, "js_scheme_removed"),
        (_EVENT_HANDLER, "event_handler_removed"),
        (_ANGLE_BRACKETS, "angle_brackets_removed"),
    ):
        text, count = pattern.subn("", text)
        if count:
            flags.append(flag)

    text = text.strip()

    if len(text) > max_length:
        logger.warning("Message truncated from %d to %d chars", len(text), max_length)
        text = text[:max_length]
        flags.append("length_truncated")

    if flags:
        logger.debug("Sanitized message: %s", ", ".join(flags))

    return SanitizationResult(
        text=text,
        was_modified=text != original,
        flags=flags,
    )
