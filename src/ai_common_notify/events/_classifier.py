from __future__ import annotations

from ..models.event import EventPayload


def classify(payload: EventPayload) -> str | None:
    """Determine the event kind of a hook payload.

    Rules are applied in order:

    1. an explicit ``event_type`` is returned verbatim, known or not;
    2. ``tool_name`` means a tool event: ``PostToolUse`` when a
       ``tool_response`` is present, otherwise ``PreToolUse``;
    3. ``notification_type``, or both ``title`` and ``message``, means
       ``Notification``;
    4. ``session_id`` without ``tool_name`` means ``Stop``.

    Returns:
        The event kind, or None when no rule applies. Callers treat None as
        a usage error and never guess.
    """
    if payload.event_type:
        return payload.event_type

    if payload.tool_name:
        if payload.tool_response is not None:
            return "PostToolUse"
        return "PreToolUse"

    if payload.notification_type or (payload.title and payload.message):
        return "Notification"

    if payload.session_id and not payload.tool_name:
        return "Stop"

    return None
