"""ScriptRunner: run one hook or notify script in its own process."""

from __future__ import annotations

import asyncio
import logging
import os
import signal
import stat
import sys
from collections.abc import Awaitable, Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from ..models.hook import ScriptInterpreter
from ._paths import validate_script_path_strict

logger = logging.getLogger(__name__)

# Sends a best-effort diagnostic notification to the user (title, message).
Advisor = Callable[[str, str], Awaitable[object]]

_NODE_EXTENSIONS = (".js", ".cjs")
_STDERR_TAIL = 500


@dataclass(frozen=True)
class ScriptDescriptor:
    path: str
    interpreter: ScriptInterpreter = "shell"
    enabled: bool = True

    @classmethod
    def for_path(
        cls, path: str, interpreter: ScriptInterpreter | None = None, enabled: bool = True
    ) -> ScriptDescriptor:
        """Build a descriptor, inferring the interpreter from the extension when not given."""
        if interpreter is None:
            ext = os.path.splitext(path)[1].lower()
            interpreter = "node" if ext in _NODE_EXTENSIONS else "shell"
        return cls(path=path, interpreter=interpreter, enabled=enabled)


@dataclass(frozen=True)
class ExecutionResult:
    success: bool
    exit_code: int | None = None
    timed_out: bool = False
    error: str | None = None
    pid: int | None = None


async def run_subprocess(
    command: Sequence[str] | str,
    *,
    env: Mapping[str, str],
    timeout_ms: int,
    cwd: str | None = None,
    shell: bool = False,
    windows: bool = sys.platform == "win32",
) -> ExecutionResult:
    """Spawn a process with ``env`` merged over the parent environment and wait for it.

    With ``timeout_ms > 0`` the process is killed when the deadline passes.
    On POSIX the child leads its own process group so the kill also reaches
    anything it started.
    """
    new_session = not windows
    child_env = {**os.environ, **env}
    try:
        if shell:
            proc = await asyncio.create_subprocess_shell(
                str(command),
                cwd=cwd,
                env=child_env,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                start_new_session=new_session,
            )
        else:
            proc = await asyncio.create_subprocess_exec(
                *command,
                cwd=cwd,
                env=child_env,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                start_new_session=new_session,
            )
    except (OSError, ValueError) as e:
        return ExecutionResult(success=False, error=f"spawn failed: {e}")

    timeout = timeout_ms / 1000 if timeout_ms > 0 else None
    try:
        _, stderr = await asyncio.wait_for(proc.communicate(), timeout)
    except asyncio.TimeoutError:
        await _kill(proc, group=new_session)
        return ExecutionResult(
            success=False,
            timed_out=True,
            error=f"timed out after {timeout_ms} ms",
            pid=proc.pid,
        )

    code = proc.returncode
    if code == 0:
        return ExecutionResult(success=True, exit_code=0, pid=proc.pid)

    tail = stderr.decode("utf-8", errors="replace")[-_STDERR_TAIL:].strip() if stderr else ""
    logger.warning(
        "Process exited with code %s: %s",
        code,
        command,
        extra={"details": {"exit_code": code, "stderr": tail}},
    )
    return ExecutionResult(
        success=False, exit_code=code, error=f"exited with code {code}", pid=proc.pid
    )


async def _kill(proc: asyncio.subprocess.Process, group: bool) -> None:
    try:
        if group:
            os.killpg(proc.pid, signal.SIGKILL)
        else:
            proc.kill()
    except ProcessLookupError:
        pass
    await proc.wait()


class ScriptRunner:
    """Validates and runs script descriptors.

    Every failure is logged and, through ``advisor``, reported to the user as
    a desktop notification. The advisor cannot fail the run.
    """

    def __init__(
        self,
        advisor: Advisor | None = None,
        *,
        trusted_dirs: Iterable[str] | None = None,
        platform: str | None = None,
    ) -> None:
        self._advisor = advisor
        self._trusted_dirs = list(trusted_dirs) if trusted_dirs is not None else None
        self._windows = (platform or sys.platform) == "win32"

    async def execute(
        self, descriptor: ScriptDescriptor, env: Mapping[str, str], timeout_ms: int
    ) -> ExecutionResult:
        if not descriptor.enabled:
            logger.info("Script is disabled: %s", descriptor.path)
            return ExecutionResult(success=True)

        script = descriptor.path
        check = validate_script_path_strict(script, self._trusted_dirs)
        if not check:
            logger.warning("Script path validation failed: %s", check.reason)
            await self._advise(
                "Script path validation failed",
                f"The script path is invalid or not allowed: {script}",
            )
            return ExecutionResult(success=False, error=f"path rejected: {check.reason}")

        path = Path(script)
        if not await asyncio.to_thread(path.is_file):
            logger.warning("Script file not found: %s", script)
            await self._advise("Script file not found", f"The script file was not found: {script}")
            return ExecutionResult(success=False, error=f"script not found: {script}")

        if not self._windows and not await asyncio.to_thread(_is_executable, path):
            logger.warning("Script is not executable, adding owner execute bit: %s", script)
            granted = await asyncio.to_thread(_grant_owner_execute, path)
            if not granted or not await asyncio.to_thread(_is_executable, path):
                await self._advise(
                    "Script execution permission denied",
                    f"Please add execute permission to the script: chmod +x {script}",
                )
                return ExecutionResult(success=False, error=f"permission denied: {script}")

        logger.info("Executing %s script: %s", descriptor.interpreter, script)
        result = await run_subprocess(
            self._command_for(descriptor),
            env=env,
            timeout_ms=timeout_ms,
            cwd=str(path.parent),
            windows=self._windows,
        )
        if result.success:
            logger.info("Script executed successfully: %s", script)
        elif result.timed_out:
            logger.warning("Script execution timeout: %s", script)
            await self._advise("Script execution timeout", f"{script} {result.error}")
        else:
            logger.warning("Script execution failed: %s (%s)", script, result.error)
            await self._advise("Script execution error", f"Error executing script {script}: {result.error}")
        return result

    def _command_for(self, descriptor: ScriptDescriptor) -> list[str]:
        if descriptor.interpreter == "node":
            return ["node", descriptor.path]
        if self._windows:
            return ["cmd", "/c", descriptor.path]
        return ["bash", descriptor.path]

    async def _advise(self, title: str, message: str) -> None:
        if self._advisor is None:
            return
        try:
            await self._advisor(title, message)
        except Exception:
            logger.error("Failed to send diagnostic notification: %s", title, exc_info=True)


def _is_executable(path: Path) -> bool:
    try:
        mode = path.stat().st_mode
    except OSError:
        return False
    return bool(mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH))


def _grant_owner_execute(path: Path) -> bool:
    try:
        path.chmod(path.stat().st_mode | stat.S_IXUSR)
    except OSError as e:
        logger.warning("Failed to add execute permission to %s: %s", path, e)
        return False
    return True
