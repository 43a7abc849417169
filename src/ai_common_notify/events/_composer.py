from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..models.event import EventPayload
from ..models.notification import ComposedNotification, ProjectContext, Urgency


@dataclass(frozen=True)
class _Template:
    title: str
    message: str
    urgency: Urgency


_TEMPLATES: dict[str, _Template] = {
    "PreToolUse": _Template("Claude Tool Request", "Claude wants to use {tool_name}", "normal"),
    "PostToolUse": _Template("Claude Tool Complete", "{tool_name} execution completed", "low"),
    "Notification": _Template("Claude Notification", "Claude has sent a notification", "normal"),
    "Stop": _Template("Claude Response Complete", "Claude has finished responding", "normal"),
    "SubagentStop": _Template("Claude Task Complete", "Claude subagent has finished", "low"),
}

_FALLBACK_TEMPLATE = _Template("Claude Event", "Unknown event: {event_type}", "normal")

# Tools that run commands or change files; a PreToolUse for these needs review.
HIGH_IMPACT_TOOLS = frozenset({"Bash", "Write", "Edit", "MultiEdit"})

WARNING_PREFIX = "⚠️ "
PREVIEW_MAX_LENGTH = 50
UNKNOWN_TOOL = "Unknown Tool"


def compose(
    kind: str, payload: EventPayload, project: ProjectContext | None
) -> ComposedNotification:
    """Build the title, message and urgency for an event."""
    template = _TEMPLATES.get(kind, _FALLBACK_TEMPLATE)
    tool_name = payload.tool_name or UNKNOWN_TOOL

    title = template.title
    message = template.message.replace("{tool_name}", tool_name).replace("{event_type}", kind)
    urgency = template.urgency

    if project is not None:
        title = f"{title} - {project.name}"

    if kind == "Notification" and payload.message:
        message = payload.message

    if kind == "PreToolUse":
        if tool_name in HIGH_IMPACT_TOOLS:
            urgency = "critical"
            title = f"{WARNING_PREFIX}{title}"
            message = f"Claude wants to use {tool_name} - Review required!"
        preview = tool_input_preview(tool_name, payload.tool_input)
        if preview:
            message = f"{message}\n{preview}"

    if project is not None:
        message = f"{message}\nProject: {project.name} ({project.path})"

    return ComposedNotification(title=title, message=message, urgency=urgency)


def tool_input_preview(tool_name: str, tool_input: Any) -> str | None:
    """Short, length-capped description of what a tool is about to do."""
    if not isinstance(tool_input, Mapping):
        return None

    if tool_name == "Bash":
        command = tool_input.get("command")
        command = command.strip() if isinstance(command, str) else ""
        if len(command) > PREVIEW_MAX_LENGTH:
            return f"Command: {command[: PREVIEW_MAX_LENGTH - 3]}..."
        return f"Command: {command}"

    file_path = tool_input.get("file_path")
    if not isinstance(file_path, str) or not file_path:
        return None
    if tool_name in ("Write", "Edit", "MultiEdit"):
        return f"File: {file_path}"
    if tool_name == "Read":
        return f"Reading: {file_path}"
    return None
