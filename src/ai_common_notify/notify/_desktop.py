from __future__ import annotations

import math
from pathlib import Path
from typing import TYPE_CHECKING

from desktop_notifier import DEFAULT_SOUND, DesktopNotifier, Icon, Sound, Urgency

from ._platforms import DEFAULT_SOUND as DEFAULT_SOUND_NAME

if TYPE_CHECKING:
    from ._platforms import PlatformOptions

APP_NAME = "AI Common Notify"

_URGENCIES = {
    "low": Urgency.Low,
    "normal": Urgency.Normal,
    "critical": Urgency.Critical,
}


class DesktopNotifierTransport:
    """Sends notifications through the desktop-notifier library."""

    def __init__(self, notifier: DesktopNotifier | None = None, app_name: str = APP_NAME) -> None:
        self._notifier = notifier
        self._app_name = app_name

    async def send(self, options: PlatformOptions) -> bool:
        if self._notifier is None:
            self._notifier = DesktopNotifier(app_name=self._app_name)
        dispatched = False

        def on_dispatched() -> None:
            nonlocal dispatched
            dispatched = True

        # desktop-notifier logs backend failures instead of raising; only a
        # dispatched notification fires the callback.
        await self._notifier.send(
            title=options.title,
            message=options.message,
            urgency=_URGENCIES.get(options.urgency.lower(), Urgency.Normal),
            icon=Icon(path=Path(options.icon)) if options.icon else None,
            sound=_sound(options.sound),
            timeout=_timeout(options.timeout),
            on_dispatched=on_dispatched,
        )
        return dispatched


def _timeout(seconds: float | None) -> int:
    if seconds is None or seconds < 0:
        return -1
    if seconds == 0:
        return 0
    return max(1, math.ceil(seconds))


def _sound(name: str | None) -> Sound | None:
    if name is None:
        return None
    if name == DEFAULT_SOUND_NAME:
        return DEFAULT_SOUND
    return Sound(name=name)
