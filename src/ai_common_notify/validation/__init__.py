from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path

from ._config import validate_config as _validate_config
from ._options import validate_notification_options
from ._result import ValidationIssue, ValidationResult


def validate_config(data: dict[str, Any]) -> ValidationResult:
    """Validate a configuration dict (e.g. the merged global and project files).

    Checks value types and ranges, hook rule shapes and matchers, and that
    referenced icon and script files exist.
    """
    return _validate_config(data)


def validate_config_file(path: Path) -> ValidationResult:
    """Load and validate a single config.json or .ai-notify.json file from disk.

    Raises:
        ConfigLoadError: The file cannot be read or is not a JSON object.
    """
    from ..loaders.config import load_config_file

    return _validate_config(load_config_file(path))


__all__ = [
    "ValidationIssue",
    "ValidationResult",
    "validate_config",
    "validate_config_file",
    "validate_notification_options",
]
