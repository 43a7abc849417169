from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..models.notification import URGENCIES
from ._result import ValidationResult

TITLE_MAX_LENGTH = 100
MESSAGE_MAX_LENGTH = 1000


def validate_notification_options(options: Mapping[str, Any]) -> ValidationResult:
    """Check direct-send options. Over-long text is only a warning since the OS may truncate it."""
    result = ValidationResult()

    title = options.get("title")
    if not title or not isinstance(title, str):
        result.error("title", "is required and must be a string")
    elif len(title) > TITLE_MAX_LENGTH:
        result.warning("title", f"is longer than {TITLE_MAX_LENGTH} characters, may be truncated")

    message = options.get("message")
    if not message or not isinstance(message, str):
        result.error("message", "is required and must be a string")
    elif len(message) > MESSAGE_MAX_LENGTH:
        result.warning("message", f"is longer than {MESSAGE_MAX_LENGTH} characters, may be truncated")

    urgency = options.get("urgency")
    if urgency is not None and urgency not in URGENCIES:
        result.error("urgency", f"must be one of: {', '.join(URGENCIES)}")

    timeout = options.get("timeout")
    if timeout is not None and (
        isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout < 0
    ):
        result.error("timeout", "must be a number >= 0")

    sound = options.get("sound")
    if sound is not None and not isinstance(sound, bool):
        result.error("sound", "must be a boolean")

    return result
