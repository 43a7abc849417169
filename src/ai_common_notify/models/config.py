"""Configuration snapshot models (global config.json and project .ai-notify.json)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .hook import HookRule, ScriptInterpreter
from .notification import Urgency

_MODEL_CONFIG = ConfigDict(extra="allow", populate_by_name=True, frozen=True)


class NotificationDefaults(BaseModel):
    model_config = _MODEL_CONFIG
    default_timeout: float = Field(10, alias="defaultTimeout", ge=0)  # seconds
    default_sound: bool = Field(True, alias="defaultSound")
    default_urgency: Urgency = Field("normal", alias="defaultUrgency")
    default_icon: str | None = Field(None, alias="defaultIcon")


class WindowsSettings(BaseModel):
    model_config = _MODEL_CONFIG
    sound_enabled: bool = Field(True, alias="soundEnabled")


class MacOSSettings(BaseModel):
    model_config = _MODEL_CONFIG
    sound_enabled: bool = Field(True, alias="soundEnabled")
    sound_name: str = Field("Glass", alias="soundName")


class UrgencyMapping(BaseModel):
    """Maps our urgency levels to the notification daemon's own level names."""

    model_config = _MODEL_CONFIG
    low: str = "low"
    normal: str = "normal"
    critical: str = "critical"


class LinuxSettings(BaseModel):
    model_config = _MODEL_CONFIG
    sound_enabled: bool = Field(True, alias="soundEnabled")
    urgency_mapping: UrgencyMapping = Field(default_factory=UrgencyMapping, alias="urgencyMapping")


class PlatformSettings(BaseModel):
    model_config = _MODEL_CONFIG
    windows: WindowsSettings = Field(default_factory=WindowsSettings)
    macos: MacOSSettings = Field(default_factory=MacOSSettings)
    linux: LinuxSettings = Field(default_factory=LinuxSettings)


class ToolSettings(BaseModel):
    model_config = _MODEL_CONFIG
    icon: str | None = None


class NotifyScriptConfig(BaseModel):
    """A script run for every notification sent."""

    model_config = _MODEL_CONFIG
    type: ScriptInterpreter | None = None
    path: str
    enabled: bool = True


class ScriptSettings(BaseModel):
    model_config = _MODEL_CONFIG
    timeout: int = Field(30000, gt=0)  # milliseconds
    notify: list[NotifyScriptConfig] = []


class LoggingSettings(BaseModel):
    model_config = _MODEL_CONFIG
    retention_hours: float = Field(24, alias="retentionHours", gt=0)
    level: str = "info"


def _default_tools() -> dict[str, ToolSettings]:
    return {name: ToolSettings() for name in ("claude-code", "cursor", "windsurf", "kiro")}


class NotifyConfig(BaseModel):
    """Merged configuration. Read-only for the whole of one notification send."""

    model_config = _MODEL_CONFIG
    notifications: NotificationDefaults = Field(default_factory=NotificationDefaults)
    platforms: PlatformSettings = Field(default_factory=PlatformSettings)
    tools: dict[str, ToolSettings] = Field(default_factory=_default_tools)
    scripts: ScriptSettings = Field(default_factory=ScriptSettings)
    hooks: dict[str, list[HookRule]] = {}
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
