"""NotificationDispatcher: apply configured defaults and hand a notification to the OS."""

from __future__ import annotations

import logging
import os
from dataclasses import replace

from ..models.config import NotifyConfig
from ..models.notification import NotificationRequest
from ._platforms import PLATFORM_BUILDERS, Platform, PlatformOptions, detect_platform
from ._protocols import NotificationTransport

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Resolves defaults, builds platform options and sends through a transport.

    The platform builder is selected once, at construction. Transport errors
    are logged and reported as a False result.
    """

    def __init__(
        self,
        config: NotifyConfig,
        transport: NotificationTransport | None = None,
        *,
        platform: str | None = None,
    ) -> None:
        if transport is None:
            from ._desktop import DesktopNotifierTransport

            transport = DesktopNotifierTransport()
        self._config = config
        self._transport = transport
        self._platform: Platform = detect_platform(platform)
        self._builder = PLATFORM_BUILDERS[self._platform]

    @property
    def platform(self) -> Platform:
        return self._platform

    def build_options(self, request: NotificationRequest) -> PlatformOptions:
        defaults = self._config.notifications
        resolved = replace(
            request,
            urgency=request.urgency or defaults.default_urgency,
            timeout=request.timeout if request.timeout is not None else defaults.default_timeout,
            sound=request.sound if request.sound is not None else defaults.default_sound,
            icon=self._resolve_icon(request),
        )
        return self._builder(resolved, self._config.platforms)

    async def send(self, request: NotificationRequest) -> bool:
        try:
            options = self.build_options(request)
            shown = await self._transport.send(options)
        except Exception:
            logger.exception("Error sending notification %r", request.title)
            return False
        if shown:
            logger.info(
                "Notification sent: %s",
                options.title,
                extra={"details": {"platform": self._platform, "urgency": options.urgency}},
            )
        else:
            logger.warning("Notification was not shown: %s", options.title)
        return bool(shown)

    def _resolve_icon(self, request: NotificationRequest) -> str | None:
        """Explicit icon, then the tool's icon, then the default. Only existing files count."""
        icon = request.icon
        if not icon and request.tool_name:
            tool = self._config.tools.get(request.tool_name)
            icon = tool.icon if tool else None
        icon = icon or self._config.notifications.default_icon
        if icon and os.path.isfile(icon):
            return icon
        if icon:
            logger.debug("Icon not found, sending without one: %s", icon)
        return None
