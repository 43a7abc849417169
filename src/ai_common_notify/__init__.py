"""Desktop notifications and hook scripts for AI coding assistants."""

from .errors import ConfigLoadError, PayloadError, UnsupportedToolError
from .events import classify, compose
from .loaders import load_config
from .models import EventPayload, NotificationRequest, NotifyConfig, ProjectContext
from .project import resolve_payload_project, resolve_project
from .scripts import ExecutionResult, ScriptDescriptor, ScriptRunner
from .service import NotificationService

__all__ = [
    "ConfigLoadError",
    "EventPayload",
    "ExecutionResult",
    "NotificationRequest",
    "NotificationService",
    "NotifyConfig",
    "PayloadError",
    "ProjectContext",
    "ScriptDescriptor",
    "ScriptRunner",
    "UnsupportedToolError",
    "classify",
    "compose",
    "load_config",
    "resolve_payload_project",
    "resolve_project",
]
