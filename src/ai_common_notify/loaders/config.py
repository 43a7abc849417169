from __future__ import annotations

import json
import logging
import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..errors import ConfigLoadError
from ..models.config import NotifyConfig

logger = logging.getLogger(__name__)

APP_DIR_NAME = "ai-common-notify"
CONFIG_FILE_NAME = "config.json"
PROJECT_CONFIG_FILE_NAME = ".ai-notify.json"
CONFIG_PATH_ENV = "AI_COMMON_NOTIFY_CONFIG"


def default_config_dir() -> Path:
    """``%APPDATA%/ai-common-notify`` on Windows, ``~/.config/ai-common-notify`` elsewhere."""
    if sys.platform == "win32" and os.environ.get("APPDATA"):
        return Path(os.environ["APPDATA"]) / APP_DIR_NAME
    return Path.home() / ".config" / APP_DIR_NAME


def global_config_path() -> Path:
    override = os.environ.get(CONFIG_PATH_ENV)
    if override:
        return Path(override).expanduser()
    return default_config_dir() / CONFIG_FILE_NAME


def project_config_path(project_dir: Path | None = None) -> Path:
    return (project_dir or Path.cwd()) / PROJECT_CONFIG_FILE_NAME


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into a copy of ``base``. Mappings merge; any other value replaces."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_config_file(path: Path) -> dict[str, Any]:
    """Read one JSON config file.

    Raises:
        ConfigLoadError: The file cannot be read, is not valid JSON, or is not a JSON object.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigLoadError(f"Cannot read config file {path}: {e}", path=path) from e
    if not text.strip():
        return {}
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigLoadError(f"Invalid JSON in {path}: {e}", path=path) from e
    if not isinstance(data, dict):
        raise ConfigLoadError(f"Config file {path} must contain a JSON object", path=path)
    return data


def load_raw_config(global_path: Path | None = None, project_dir: Path | None = None) -> dict[str, Any]:
    """Deep-merge the global and project files without validating. Unloadable files are skipped."""
    merged: dict[str, Any] = {}
    for path in (global_path or global_config_path(), project_config_path(project_dir)):
        if not path.is_file():
            continue
        try:
            data = load_config_file(path)
        except ConfigLoadError as e:
            logger.error("Skipping config file: %s", e, extra={"details": {"path": str(path)}})
            continue
        logger.debug("Loaded config file %s", path)
        merged = deep_merge(merged, data)
    return merged


def load_config(global_path: Path | None = None, project_dir: Path | None = None) -> NotifyConfig:
    """Build the configuration snapshot: defaults, then the global file, then the project file.

    An invalid merged result is logged and replaced by the defaults.
    """
    raw = load_raw_config(global_path, project_dir)
    try:
        return NotifyConfig.model_validate(raw)
    except ValidationError as e:
        logger.error("Invalid configuration, using defaults: %s", e)
        return NotifyConfig()
