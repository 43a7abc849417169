"""HookDispatcher: run configured hook actions for a classified event."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping
from types import MappingProxyType

from ..models.event import EventPayload
from ..models.hook import CommandAction, HookRule, ScriptAction
from ..models.notification import ProjectContext
from ..scripts._environment import build_script_environment
from ..scripts._runner import ScriptDescriptor, ScriptRunner, run_subprocess

logger = logging.getLogger(__name__)

WILDCARD_MATCHERS = frozenset({"", "*", ".*"})


def rule_matches(rule: HookRule, payload: EventPayload) -> bool:
    """True if the rule's matcher accepts the payload.

    A wildcard always matches. Otherwise the matcher is a regex searched in
    the payload message and in the tool name; either match is enough.
    """
    matcher = rule.matcher.strip()
    if matcher in WILDCARD_MATCHERS:
        return True
    try:
        pattern = re.compile(matcher)
    except re.error as e:
        logger.warning("Invalid hook matcher %r: %s", matcher, e)
        return False
    return any(
        pattern.search(field) is not None
        for field in (payload.message, payload.tool_name)
        if field
    )


class HookDispatcher:
    """Runs hook rules sequentially, in declaration order.

    Failures are logged and never propagate to the caller: the primary
    notification is sent whatever happens here.
    """

    def __init__(
        self,
        rules: Mapping[str, list[HookRule]],
        runner: ScriptRunner,
        timeout_ms: int,
        *,
        windows: bool | None = None,
    ) -> None:
        self._rules = rules
        self._runner = runner
        self._timeout_ms = timeout_ms
        self._windows = os.name == "nt" if windows is None else windows

    async def run_hooks(
        self,
        kind: str,
        payload: EventPayload,
        project: ProjectContext,
        environment: Mapping[str, str] | None = None,
    ) -> None:
        rules = self._rules.get(kind)
        if not rules:
            return
        env = event_environment(kind, payload, project, environment)
        for index, rule in enumerate(rules):
            if not rule_matches(rule, payload):
                continue
            logger.info("Hook rule %s[%d] matched (matcher %r)", kind, index, rule.matcher)
            for action in rule.actions:
                try:
                    await self._run_action(action, env, project)
                except Exception:
                    logger.exception("Hook action failed for %s[%d]", kind, index)

    async def _run_action(
        self,
        action: ScriptAction | CommandAction,
        env: Mapping[str, str],
        project: ProjectContext,
    ) -> None:
        if not action.enabled:
            logger.info("Skipping disabled %s hook action", action.type)
            return

        if isinstance(action, ScriptAction):
            descriptor = ScriptDescriptor.for_path(action.path, action.interpreter)
            result = await self._runner.execute(descriptor, env, self._timeout_ms)
            label = action.path
        else:
            cwd = project.path if os.path.isdir(project.path) else None
            result = await run_subprocess(
                action.command,
                env=env,
                timeout_ms=self._timeout_ms,
                cwd=cwd,
                shell=True,
                windows=self._windows,
            )
            label = action.command

        if result.success:
            logger.info("Hook action succeeded: %s", label)
        else:
            logger.warning(
                "Hook action failed: %s (%s)",
                label,
                result.error,
                extra={"details": {"exit_code": result.exit_code, "timed_out": result.timed_out}},
            )


def event_environment(
    kind: str,
    payload: EventPayload,
    project: ProjectContext,
    base: Mapping[str, str] | None = None,
) -> Mapping[str, str]:
    """Script environment for an event: ``base`` (or one built from the payload) plus event keys."""
    extra = {"NOTIFY_EVENT_TYPE": kind, "NOTIFY_PROJECT_PATH": project.path}
    if payload.session_id:
        extra["NOTIFY_SESSION_ID"] = payload.session_id
    if payload.transcript_path:
        extra["NOTIFY_TRANSCRIPT_PATH"] = payload.transcript_path
    if base is None:
        return build_script_environment(
            title=payload.title or "",
            message=payload.message or "",
            urgency="normal",
            project_name=project.name,
            tool_name=payload.tool_name or "",
            extra=extra,
        )
    return MappingProxyType({**base, **extra})
