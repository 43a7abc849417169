"""Write ai-common-notify hook entries into a project's Claude Code settings."""

from __future__ import annotations

import json
import logging
import shutil
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..errors import ConfigLoadError, UnsupportedToolError
from ..loaders.config import deep_merge

logger = logging.getLogger(__name__)

SUPPORTED_TOOLS = ("claudecode",)
DEFAULT_EVENTS = ("Notification", "Stop")
DEFAULT_COMMAND = "ai-common-notify hook"


@dataclass
class InstallResult:
    path: Path
    added: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    backup: Path | None = None


def claude_settings_path(project_root: Path) -> Path:
    """``.claude/settings.json`` when ``.claude/`` exists, else the legacy ``claude-config.json``."""
    if (project_root / ".claude").is_dir():
        return project_root / ".claude" / "settings.json"
    return project_root / "claude-config.json"


def hook_entry(command: str = DEFAULT_COMMAND, matcher: str = ".*") -> dict[str, Any]:
    return {"matcher": matcher, "hooks": [{"type": "command", "command": command}]}


def install_hooks(
    tool: str,
    project_root: Path,
    events: Iterable[str] = DEFAULT_EVENTS,
    command: str = DEFAULT_COMMAND,
) -> InstallResult:
    """Install hooks for ``tool``.

    Raises:
        UnsupportedToolError: No installer exists for the tool.
        ConfigLoadError: The existing settings file is not a JSON object.
    """
    if tool.lower().replace("-", "") not in SUPPORTED_TOOLS:
        raise UnsupportedToolError(tool)
    return install_claude_hooks(project_root, events, command)


def install_claude_hooks(
    project_root: Path,
    events: Iterable[str] = DEFAULT_EVENTS,
    command: str = DEFAULT_COMMAND,
) -> InstallResult:
    """Add a ``command`` hook for each event, keeping every other setting.

    Events that already run ``command`` are skipped. The previous file is
    kept as ``<name>.backup`` before it is rewritten.
    """
    path = claude_settings_path(project_root)
    result = InstallResult(path=path)
    existing = _load_settings(path)
    current = existing.get("hooks")
    hooks: dict[str, Any] = dict(current) if isinstance(current, dict) else {}

    for event in events:
        entries = hooks.get(event)
        entries = list(entries) if isinstance(entries, list) else []
        if _runs_command(entries, command):
            result.skipped.append(event)
            continue
        entries.append(hook_entry(command))
        hooks[event] = entries
        result.added.append(event)

    if not result.added:
        logger.info("Hooks already installed in %s", path)
        return result

    if path.exists():
        result.backup = path.with_name(path.name + ".backup")
        shutil.copyfile(path, result.backup)
    _atomic_write(path, json.dumps(deep_merge(existing, {"hooks": hooks}), indent=2) + "\n")
    logger.info("Installed hooks for %s in %s", ", ".join(result.added), path)
    return result


def _runs_command(entries: list[Any], command: str) -> bool:
    for entry in entries:
        actions = entry.get("hooks") if isinstance(entry, dict) else None
        if not isinstance(actions, list):
            continue
        if any(isinstance(a, dict) and a.get("command") == command for a in actions):
            return True
    return False


def _load_settings(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        text = path.read_text(encoding="utf-8")
        data = json.loads(text) if text.strip() else {}
    except (json.JSONDecodeError, OSError) as e:
        raise ConfigLoadError(f"Cannot read settings file {path}: {e}", path=path) from e
    if not isinstance(data, dict):
        raise ConfigLoadError(f"Settings file {path} must contain a JSON object", path=path)
    return data


def _atomic_write(path: Path, data: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(data, encoding="utf-8")
    tmp.replace(path)
