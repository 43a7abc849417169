"""Desktop notification dispatch."""

from ._dispatcher import NotificationDispatcher
from ._in_memory import RecordingTransport
from ._platforms import (
    DEFAULT_SOUND,
    PLATFORM_BUILDERS,
    Platform,
    PlatformBuilder,
    PlatformOptions,
    build_linux_options,
    build_macos_options,
    build_windows_options,
    detect_platform,
)
from ._protocols import NotificationTransport

__all__ = [
    "DEFAULT_SOUND",
    "PLATFORM_BUILDERS",
    "NotificationDispatcher",
    "NotificationTransport",
    "Platform",
    "PlatformBuilder",
    "PlatformOptions",
    "RecordingTransport",
    "build_linux_options",
    "build_macos_options",
    "build_windows_options",
    "detect_platform",
]
