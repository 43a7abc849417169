from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class ConfigLoadError(Exception):
    """Raised when a configuration file cannot be read or parsed.

    Attributes:
        path: The configuration file that could not be loaded, if applicable.
    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)


class PayloadError(Exception):
    """Raised when a hook payload is not a JSON object."""


class UnsupportedToolError(Exception):
    """Raised when setting up hooks for a tool that has no installer."""

    def __init__(self, tool: str) -> None:
        self.tool = tool
        super().__init__(f"Unsupported tool: {tool}")
