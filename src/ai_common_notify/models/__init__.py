from .config import (
    LinuxSettings,
    LoggingSettings,
    MacOSSettings,
    NotificationDefaults,
    NotifyConfig,
    NotifyScriptConfig,
    PlatformSettings,
    ScriptSettings,
    ToolSettings,
    UrgencyMapping,
    WindowsSettings,
)
from .event import KNOWN_EVENTS, EventPayload, HookEvent, is_known_event
from .hook import CommandAction, HookAction, HookRule, HooksConfig, ScriptAction, ScriptInterpreter
from .notification import (
    UNKNOWN_PROJECT,
    URGENCIES,
    ComposedNotification,
    NotificationRequest,
    ProjectContext,
    Urgency,
)

__all__ = [
    "KNOWN_EVENTS",
    "UNKNOWN_PROJECT",
    "URGENCIES",
    "CommandAction",
    "ComposedNotification",
    "EventPayload",
    "HookAction",
    "HookEvent",
    "HookRule",
    "HooksConfig",
    "LinuxSettings",
    "LoggingSettings",
    "MacOSSettings",
    "NotificationDefaults",
    "NotificationRequest",
    "NotifyConfig",
    "NotifyScriptConfig",
    "PlatformSettings",
    "ProjectContext",
    "ScriptAction",
    "ScriptInterpreter",
    "ScriptSettings",
    "ToolSettings",
    "Urgency",
    "UrgencyMapping",
    "WindowsSettings",
    "is_known_event",
]
