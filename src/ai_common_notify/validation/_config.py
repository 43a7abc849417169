from __future__ import annotations

import os
import re
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from ..hooks import WILDCARD_MATCHERS
from ..loaders.config import deep_merge
from ..models.config import NotifyConfig
from ..models.event import is_known_event
from ..models.hook import HookRule
from ..models.notification import URGENCIES
from ._result import ValidationResult

PLATFORMS = ("windows", "macos", "linux")
SCRIPT_TYPES = ("node", "shell")


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key)
    return value if isinstance(value, Mapping) else {}


def _with_defaults(data: Mapping[str, Any]) -> dict[str, Any]:
    return deep_merge(NotifyConfig().model_dump(by_alias=True), data)


def validate_config(data: Mapping[str, Any]) -> ValidationResult:
    """Validate a raw (merged) configuration mapping.

    Missing sections take their defaults. Missing files referenced by the
    configuration are warnings; wrong types and out-of-range values are errors.
    """
    config = _with_defaults(data)
    result = ValidationResult()
    _check_notifications(_section(config, "notifications"), result)
    _check_platforms(_section(config, "platforms"), result)
    _check_scripts(_section(config, "scripts"), result)
    _check_tools(_section(config, "tools"), result)
    _check_hooks(_section(config, "hooks"), result)
    _check_logging(_section(config, "logging"), result)
    return result


def _check_notifications(section: Mapping[str, Any], result: ValidationResult) -> None:
    timeout = section.get("defaultTimeout")
    if not _is_number(timeout) or timeout < 0:
        result.error("notifications.defaultTimeout", "must be a number >= 0")
    if section.get("defaultUrgency") not in URGENCIES:
        result.error("notifications.defaultUrgency", f"must be one of: {', '.join(URGENCIES)}")
    if not isinstance(section.get("defaultSound"), bool):
        result.error("notifications.defaultSound", "must be a boolean")
    icon = section.get("defaultIcon")
    if icon is not None and not isinstance(icon, str):
        result.error("notifications.defaultIcon", "must be a string")
    elif icon and not os.path.exists(icon):
        result.warning("notifications.defaultIcon", f"Default icon file not found: {icon}")


def _check_platforms(section: Mapping[str, Any], result: ValidationResult) -> None:
    for platform in PLATFORMS:
        settings = section.get(platform)
        if isinstance(settings, Mapping) and not isinstance(settings.get("soundEnabled"), bool):
            result.error(f"platforms.{platform}.soundEnabled", "must be a boolean")
    mapping = _section(_section(section, "linux"), "urgencyMapping")
    for level in URGENCIES:
        if level in mapping and not isinstance(mapping[level], str):
            result.error(f"platforms.linux.urgencyMapping.{level}", "must be a string")
    sound_name = _section(section, "macos").get("soundName")
    if sound_name is not None and not isinstance(sound_name, str):
        result.error("platforms.macos.soundName", "must be a string")


def _check_scripts(section: Mapping[str, Any], result: ValidationResult) -> None:
    timeout = section.get("timeout")
    if not _is_number(timeout) or timeout <= 0:
        result.error("scripts.timeout", "must be a number > 0")
    scripts = section.get("notify")
    if not isinstance(scripts, list):
        result.error("scripts.notify", "must be a list")
        return
    for i, script in enumerate(scripts):
        path = script.get("path") if isinstance(script, Mapping) else None
        if not isinstance(path, str) or not path:
            result.error(f"scripts.notify[{i}].path", "cannot be empty and must be a string")
            continue
        if not os.path.exists(path):
            result.warning(f"scripts.notify[{i}].path", f"Script file not found: {path}")
        script_type = script.get("type")
        if script_type is not None and script_type not in SCRIPT_TYPES:
            result.warning(f"scripts.notify[{i}].type", f"Unknown script type: {script_type}")
        if "enabled" in script and not isinstance(script["enabled"], bool):
            result.warning(f"scripts.notify[{i}].enabled", "should be a boolean, defaulting to true")


def _check_tools(section: Mapping[str, Any], result: ValidationResult) -> None:
    for name, tool in section.items():
        icon = tool.get("icon") if isinstance(tool, Mapping) else None
        if isinstance(icon, str) and icon and not os.path.exists(icon):
            result.warning(f"tools.{name}.icon", f"Icon file not found for tool {name}: {icon}")


def _check_hooks(section: Mapping[str, Any], result: ValidationResult) -> None:
    for kind, rules in section.items():
        if not is_known_event(kind):
            result.warning(f"hooks.{kind}", f"Unknown event kind: {kind}")
        if not isinstance(rules, list):
            result.error(f"hooks.{kind}", "must be a list of hook rules")
            continue
        for i, raw in enumerate(rules):
            try:
                rule = HookRule.model_validate(raw)
            except ValidationError as e:
                for err in e.errors():
                    loc = ".".join(str(part) for part in err["loc"])
                    result.error(f"hooks.{kind}[{i}].{loc}" if loc else f"hooks.{kind}[{i}]", err["msg"])
                continue
            if rule.matcher.strip() in WILDCARD_MATCHERS:
                continue
            try:
                re.compile(rule.matcher)
            except re.error as e:
                result.warning(f"hooks.{kind}[{i}].matcher", f"Invalid regular expression: {e}")


def _check_logging(section: Mapping[str, Any], result: ValidationResult) -> None:
    hours = section.get("retentionHours")
    if not _is_number(hours) or hours <= 0:
        result.error("logging.retentionHours", "must be a number > 0")
