"""Protocols (ports) for the notification layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ._platforms import PlatformOptions


class NotificationTransport(Protocol):
    """Hands a notification to the OS. Returns False when it was not shown."""

    async def send(self, options: PlatformOptions) -> bool: ...
