from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Literal, get_args

from pydantic import BaseModel, ConfigDict

from ..errors import PayloadError

# Event kinds with a dedicated notification template.
HookEvent = Literal[
    "PreToolUse",
    "PostToolUse",
    "Notification",
    "Stop",
    "SubagentStop",
]

KNOWN_EVENTS: frozenset[str] = frozenset(get_args(HookEvent))


def is_known_event(kind: str) -> bool:
    return kind in KNOWN_EVENTS


class EventPayload(BaseModel):
    """Hook payload as sent by the upstream tool. Every field is optional."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)
    event_type: str | None = None
    tool_name: str | None = None
    tool_input: Any = None
    tool_response: Any = None
    transcript_path: str | None = None
    session_id: str | None = None
    title: str | None = None
    message: str | None = None
    notification_type: str | None = None
    project_name: str | None = None
    project_path: str | None = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any] | str | bytes) -> EventPayload:
        """Build a payload from a mapping or a JSON object string.

        Raises:
            PayloadError: If the input is not a JSON object.
        """
        if isinstance(raw, (str, bytes)):
            try:
                raw = json.loads(raw)
            except json.JSONDecodeError as e:
                raise PayloadError(f"Invalid JSON payload: {e}") from e
        if not isinstance(raw, Mapping):
            raise PayloadError(f"Payload must be a JSON object, got {type(raw).__name__}")
        # Upstream tools send mixed shapes; keep only what the known fields accept.
        data = {k: v for k, v in raw.items() if isinstance(k, str)}
        for key in _STRING_FIELDS:
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                data[key] = str(value)
        return cls.model_validate(data)


_STRING_FIELDS = (
    "event_type",
    "tool_name",
    "transcript_path",
    "session_id",
    "title",
    "message",
    "notification_type",
    "project_name",
    "project_path",
)
