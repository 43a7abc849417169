"""NotificationService: the two entry points every front-end calls."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from .errors import PayloadError
from .events import classify, compose
from .hooks import HookDispatcher, event_environment
from .loaders.config import load_config
from .models.config import NotifyConfig
from .models.event import EventPayload
from .models.notification import NotificationRequest, Urgency
from .notify import NotificationDispatcher, NotificationTransport
from .project import resolve_payload_project
from .scripts import ScriptDescriptor, ScriptRunner, build_script_environment
from .validation import validate_notification_options

logger = logging.getLogger(__name__)

DIAGNOSTIC_PREFIX = "[AI Common Notify] "
# Tool whose icon is used for notifications raised from hook events.
HOOK_TOOL_NAME = "claude-code"
_SOUND_URGENCIES = ("normal", "critical")

ConfigProvider = Callable[[], NotifyConfig]


class NotificationService:
    """Classifies events, runs hooks and notify scripts, and sends desktop notifications.

    The configuration is read once per call through ``config_provider``.
    Neither entry point raises: failures are logged and reported as False.
    """

    def __init__(
        self,
        config_provider: ConfigProvider | None = None,
        transport: NotificationTransport | None = None,
        *,
        platform: str | None = None,
        trusted_dirs: Iterable[str] | None = None,
    ) -> None:
        self._config_provider = config_provider or load_config
        self._transport = transport
        self._platform = platform
        self._trusted_dirs = list(trusted_dirs) if trusted_dirs is not None else None

    async def classify_and_process(
        self,
        raw_payload: Mapping[str, Any] | str | bytes,
        event_type: str | None = None,
        timeout_seconds: float | None = None,
    ) -> bool:
        """Handle one hook event end to end.

        ``event_type`` overrides classification. ``timeout_seconds`` overrides
        the display timeout of the resulting notification.
        """
        try:
            return await self._process(raw_payload, event_type, timeout_seconds)
        except PayloadError as e:
            logger.error("Invalid hook payload: %s", e)
            return False
        except Exception:
            logger.exception("Error processing hook event")
            return False

    async def send_direct(
        self,
        title: str,
        message: str,
        urgency: Urgency | None = None,
        timeout: float | None = None,
        sound: bool | None = None,
        icon: str | None = None,
        tool_name: str | None = None,
        project_name: str | None = None,
    ) -> bool:
        """Send a notification without classification or hooks. Notify scripts still run."""
        try:
            options = {"title": title, "message": message, "urgency": urgency, "timeout": timeout, "sound": sound}
            check = validate_notification_options(options)
            for issue in check.warnings:
                logger.warning("Notification option %s", issue)
            if not check.valid:
                logger.error(
                    "Invalid notification options: %s",
                    "; ".join(str(i) for i in check.errors),
                )
                return False

            config = self._config_provider()
            dispatcher = self._dispatcher(config)
            request = NotificationRequest(
                title=title,
                message=message,
                urgency=urgency,
                timeout=timeout,
                sound=sound,
                icon=icon,
                tool_name=tool_name,
                project_name=project_name,
            )
            resolved = dispatcher.build_options(request)
            env = build_script_environment(
                title=title,
                message=message,
                urgency=request.urgency or config.notifications.default_urgency,
                timeout=resolved.timeout or 0,
                sound=resolved.sound is not None,
                project_name=project_name or "",
                tool_name=tool_name or "",
            )
            await self._run_notify_scripts(config, self._runner(dispatcher), env)
            return await dispatcher.send(request)
        except Exception:
            logger.exception("Error sending direct notification")
            return False

    async def _process(
        self,
        raw_payload: Mapping[str, Any] | str | bytes,
        event_type: str | None,
        timeout_seconds: float | None,
    ) -> bool:
        config = self._config_provider()
        payload = EventPayload.from_raw(raw_payload)
        kind = event_type or classify(payload)
        if not kind:
            logger.warning(
                "Could not determine event type",
                extra={"details": {"keys": sorted(payload.model_dump(exclude_none=True))}},
            )
            return False

        project = resolve_payload_project(payload)
        composed = compose(kind, payload, project)
        logger.info("Processing %s event", kind, extra={"details": {"project": project.name}})

        dispatcher = self._dispatcher(config)
        request = NotificationRequest(
            title=composed.title,
            message=composed.message,
            urgency=composed.urgency,
            timeout=timeout_seconds,
            sound=None if composed.urgency in _SOUND_URGENCIES else False,
            tool_name=HOOK_TOOL_NAME,
            project_name=project.name,
        )
        options = dispatcher.build_options(request)
        env = event_environment(
            kind,
            payload,
            project,
            build_script_environment(
                title=composed.title,
                message=composed.message,
                urgency=composed.urgency,
                timeout=options.timeout or 0,
                sound=options.sound is not None,
                project_name=project.name,
                tool_name=payload.tool_name or "",
            ),
        )

        runner = self._runner(dispatcher)
        hooks = HookDispatcher(
            config.hooks,
            runner,
            config.scripts.timeout,
            windows=self._platform == "win32" if self._platform else None,
        )
        await hooks.run_hooks(kind, payload, project, env)
        await self._run_notify_scripts(config, runner, env)
        return await dispatcher.send(request)

    def _dispatcher(self, config: NotifyConfig) -> NotificationDispatcher:
        return NotificationDispatcher(config, self._transport, platform=self._platform)

    def _runner(self, dispatcher: NotificationDispatcher) -> ScriptRunner:
        async def advise(title: str, message: str) -> bool:
            return await dispatcher.send(
                NotificationRequest(title=f"{DIAGNOSTIC_PREFIX}{title}", message=message, urgency="normal")
            )

        return ScriptRunner(advise, trusted_dirs=self._trusted_dirs, platform=self._platform)

    async def _run_notify_scripts(
        self, config: NotifyConfig, runner: ScriptRunner, env: Mapping[str, str]
    ) -> None:
        """Run every ``scripts.notify`` entry in order. Failures never stop the notification."""
        for script in config.scripts.notify:
            descriptor = ScriptDescriptor.for_path(script.path, script.type, script.enabled)
            try:
                await runner.execute(descriptor, env, config.scripts.timeout)
            except Exception:
                logger.exception("Notify script failed: %s", script.path)
