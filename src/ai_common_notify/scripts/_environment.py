from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from types import MappingProxyType


def build_script_environment(
    *,
    title: str,
    message: str,
    urgency: str,
    timeout: float = 0,
    sound: bool = False,
    project_name: str = "",
    tool_name: str = "",
    extra: Mapping[str, str] | None = None,
) -> Mapping[str, str]:
    """Variables handed to hook and notify scripts.

    The result is read-only and holds only the ``NOTIFY_*`` keys; it is
    merged over a copy of the parent environment at spawn time.
    """
    env = {
        "NOTIFY_TITLE": title,
        "NOTIFY_MESSAGE": message,
        "NOTIFY_URGENCY": urgency,
        "NOTIFY_TIMEOUT": _format_number(timeout),
        "NOTIFY_SOUND": "true" if sound else "false",
        "NOTIFY_PROJECT_NAME": project_name,
        "NOTIFY_TOOL_NAME": tool_name,
        "NOTIFY_TIMESTAMP": datetime.now(timezone.utc).isoformat(),
    }
    if extra:
        env.update({k: str(v) for k, v in extra.items()})
    return MappingProxyType(env)


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)
