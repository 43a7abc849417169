from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Urgency = Literal["low", "normal", "critical"]

URGENCIES: tuple[str, ...] = ("low", "normal", "critical")


@dataclass(frozen=True)
class ProjectContext:
    """Human-readable project identity derived once per event."""

    name: str
    path: str


UNKNOWN_PROJECT = ProjectContext(name="Unknown Project", path="/")


@dataclass(frozen=True)
class ComposedNotification:
    title: str
    message: str
    urgency: Urgency


@dataclass(frozen=True)
class NotificationRequest:
    """A notification to dispatch. None fields take the configured defaults."""

    title: str
    message: str
    urgency: Urgency | None = None
    timeout: float | None = None  # seconds
    sound: bool | None = None
    icon: str | None = None
    tool_name: str | None = None
    project_name: str | None = None
