"""Hook installers for the AI tools that call ``ai-common-notify hook``."""

from .claude_code import (
    DEFAULT_COMMAND,
    DEFAULT_EVENTS,
    SUPPORTED_TOOLS,
    InstallResult,
    claude_settings_path,
    hook_entry,
    install_claude_hooks,
    install_hooks,
)

__all__ = [
    "DEFAULT_COMMAND",
    "DEFAULT_EVENTS",
    "SUPPORTED_TOOLS",
    "InstallResult",
    "claude_settings_path",
    "hook_entry",
    "install_claude_hooks",
    "install_hooks",
]
