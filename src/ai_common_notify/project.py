"""Derive a human-readable project identity from a transcript path or the cwd."""

from __future__ import annotations

import getpass
import logging
import os
import re
from pathlib import Path, PurePath

from .models.event import EventPayload
from .models.notification import UNKNOWN_PROJECT, ProjectContext

logger = logging.getLogger(__name__)

SESSION_MARKERS = frozenset({".claude"})

# Path segments that never name a project.
NOISE_SEGMENTS = frozenset(
    {"tmp", "temp", ".claude", ".git", "__pycache__", "node_modules", ".venv", "venv"}
)

GENERIC_DIR_NAMES = frozenset(
    {
        "home",
        "tmp",
        "temp",
        "desktop",
        "documents",
        "downloads",
        "users",
        "user",
        "workspace",
        "projects",
    }
)
USER_LIKE_NAMES = frozenset({"admin", "root", "developer", "user"})

CURRENT_PROJECT = "Current Project"

_SESSION_ID_RE = re.compile(r"[A-Za-z0-9_-]{21,}")


def resolve_project(hint: str | os.PathLike[str] | None = None) -> ProjectContext:
    """Resolve the project a path belongs to.

    A session marker directory (``.claude``) names its parent as the project,
    unless that parent is the home directory (a global session). Without a
    marker the path is scanned from the tail for the first segment that is
    not noise, a file name or a session id. Failing both, the cwd is used.

    Never raises: unexpected errors yield ``Unknown Project`` at ``/``.
    """
    try:
        if hint:
            found = _from_path(PurePath(os.path.normpath(os.fspath(hint))))
            if found is not None:
                return found
        return _from_cwd()
    except Exception:
        logger.warning("Could not resolve project from %r", hint, exc_info=True)
        return UNKNOWN_PROJECT


def resolve_payload_project(payload: EventPayload) -> ProjectContext:
    """Project for a hook payload: transcript path, explicit fields, then cwd."""
    if payload.transcript_path:
        return resolve_project(payload.transcript_path)
    if payload.project_name and payload.project_path:
        return ProjectContext(name=payload.project_name, path=payload.project_path)
    return resolve_project()


def _from_path(path: PurePath) -> ProjectContext | None:
    parts = path.parts

    for i, part in enumerate(parts):
        if part not in SESSION_MARKERS or i == 0 or parts[i - 1] == path.anchor:
            continue
        project_path = PurePath(*parts[:i])
        if _is_home(project_path):
            # ~/.claude holds sessions of every project; the cwd is a better guess.
            return _from_cwd()
        return ProjectContext(name=parts[i - 1], path=str(project_path))

    last = len(parts) - 1
    for i in range(last, 0, -1):
        part = parts[i]
        if i == last and PurePath(part).suffix:
            continue
        if part in NOISE_SEGMENTS or _SESSION_ID_RE.fullmatch(part):
            continue
        return ProjectContext(name=part, path=str(PurePath(*parts[: i + 1])))

    return None


def _from_cwd() -> ProjectContext:
    cwd = Path(os.getcwd())
    ignored = GENERIC_DIR_NAMES | USER_LIKE_NAMES | _login_names()

    if cwd.name and cwd.name.lower() not in ignored:
        return ProjectContext(name=cwd.name, path=str(cwd))

    parts = cwd.parts
    for i in range(len(parts) - 2, -1, -1):
        part = parts[i]
        if not part or part == cwd.anchor or part.lower() in ignored:
            continue
        return ProjectContext(name=part, path=str(PurePath(*parts[: i + 1])))

    return ProjectContext(name=CURRENT_PROJECT, path=str(cwd))


def _login_names() -> frozenset[str]:
    try:
        return frozenset({getpass.getuser().lower()})
    except Exception:
        return frozenset()


def _is_home(path: PurePath) -> bool:
    try:
        home = Path.home()
    except RuntimeError:
        return False
    return os.path.normcase(str(path)) == os.path.normcase(os.path.normpath(str(home)))
