from __future__ import annotations

import os
import tempfile
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

ALLOWED_EXTENSIONS = (".sh", ".js", ".cjs")


@dataclass(frozen=True)
class PathCheck:
    """Outcome of a script path check. Truthy when the script may run."""

    ok: bool
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.ok


def default_trusted_dirs() -> list[str]:
    """Home directory, current working directory and the system temp directory."""
    return [str(Path.home()), os.getcwd(), tempfile.gettempdir()]


def validate_script_path(
    path: str | os.PathLike[str], trusted_dirs: Iterable[str] | None = None
) -> PathCheck:
    """Check a script path lexically, without resolving symlinks."""
    raw = os.fspath(path)
    if not os.path.isabs(raw):
        return PathCheck(False, f"Script path must be absolute: {raw}")
    dirs = default_trusted_dirs() if trusted_dirs is None else list(trusted_dirs)
    return _check(os.path.normpath(raw), [os.path.normpath(d) for d in dirs])


def validate_script_path_strict(
    path: str | os.PathLike[str], trusted_dirs: Iterable[str] | None = None
) -> PathCheck:
    """Check a script path after resolving symlinks on both sides.

    Use this for any path that comes from configuration: a symlink inside a
    trusted directory that points elsewhere is rejected.
    """
    raw = os.fspath(path)
    if not os.path.isabs(raw):
        return PathCheck(False, f"Script path must be absolute: {raw}")
    dirs = default_trusted_dirs() if trusted_dirs is None else list(trusted_dirs)
    try:
        real = os.path.realpath(raw)
        real_dirs = [os.path.realpath(d) for d in dirs]
    except (OSError, ValueError) as e:
        return PathCheck(False, f"Cannot resolve script path {raw}: {e}")
    return _check(real, real_dirs)


def _check(path: str, trusted_dirs: list[str]) -> PathCheck:
    script_dir = os.path.dirname(path)
    if not any(_is_within(script_dir, d) for d in trusted_dirs):
        return PathCheck(
            False,
            "Script path must be in home directory, current project directory, "
            f"or system temp directory: {path}",
        )

    ext = os.path.splitext(path)[1].lower()
    if ext not in ALLOWED_EXTENSIONS:
        allowed = ", ".join(ALLOWED_EXTENSIONS)
        return PathCheck(False, f"Script file must have one of the extensions {allowed}: {path}")

    return PathCheck(True)


def _is_within(child: str, parent: str) -> bool:
    child = os.path.normcase(child)
    parent = os.path.normcase(parent)
    if child == parent:
        return True
    prefix = parent if parent.endswith(os.sep) else parent + os.sep
    return child.startswith(prefix)
