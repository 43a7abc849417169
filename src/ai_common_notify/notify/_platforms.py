"""Per-platform option builders. One is selected per dispatcher, by platform detection."""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from ..models.config import PlatformSettings
from ..models.notification import NotificationRequest

Platform = Literal["windows", "macos", "linux"]

DEFAULT_SOUND = "default"


@dataclass(frozen=True)
class PlatformOptions:
    """Uniform notification options handed to a transport.

    Attributes:
        urgency: Urgency level name; on Linux this is the daemon's own name
            from ``platforms.linux.urgencyMapping``.
        timeout: Display time in seconds, or None to keep the notification
            until dismissed.
        sound: None for silence, ``"default"`` for the system sound, or the
            name of a sound asset.
        icon: Path to an existing icon file, or None.
    """

    title: str
    message: str
    urgency: str
    timeout: float | None
    sound: str | None
    icon: str | None


PlatformBuilder = Callable[[NotificationRequest, PlatformSettings], PlatformOptions]


def build_windows_options(request: NotificationRequest, settings: PlatformSettings) -> PlatformOptions:
    return PlatformOptions(
        title=request.title,
        message=request.message,
        urgency=request.urgency or "normal",
        timeout=request.timeout,
        sound=DEFAULT_SOUND if request.sound and settings.windows.sound_enabled else None,
        icon=request.icon,
    )


def build_macos_options(request: NotificationRequest, settings: PlatformSettings) -> PlatformOptions:
    macos = settings.macos
    return PlatformOptions(
        title=request.title,
        message=request.message,
        urgency=request.urgency or "normal",
        timeout=request.timeout or None,
        sound=macos.sound_name if request.sound and macos.sound_enabled else None,
        icon=request.icon,
    )


def build_linux_options(request: NotificationRequest, settings: PlatformSettings) -> PlatformOptions:
    linux = settings.linux
    urgency = request.urgency or "normal"
    return PlatformOptions(
        title=request.title,
        message=request.message,
        urgency=getattr(linux.urgency_mapping, urgency, urgency),
        timeout=request.timeout,
        sound=DEFAULT_SOUND if request.sound and linux.sound_enabled else None,
        icon=request.icon,
    )


PLATFORM_BUILDERS: dict[Platform, PlatformBuilder] = {
    "windows": build_windows_options,
    "macos": build_macos_options,
    "linux": build_linux_options,
}


def detect_platform(platform: str | None = None) -> Platform:
    """Map ``sys.platform`` (or the given value) to a builder key. Unknown systems use Linux."""
    platform = platform or sys.platform
    if platform == "win32":
        return "windows"
    if platform == "darwin":
        return "macos"
    return "linux"
