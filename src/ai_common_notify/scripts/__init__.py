"""Script path validation, environment building and execution."""

from ._environment import build_script_environment
from ._paths import (
    ALLOWED_EXTENSIONS,
    PathCheck,
    default_trusted_dirs,
    validate_script_path,
    validate_script_path_strict,
)
from ._runner import Advisor, ExecutionResult, ScriptDescriptor, ScriptRunner, run_subprocess

__all__ = [
    "ALLOWED_EXTENSIONS",
    "Advisor",
    "ExecutionResult",
    "PathCheck",
    "ScriptDescriptor",
    "ScriptRunner",
    "build_script_environment",
    "default_trusted_dirs",
    "validate_script_path",
    "validate_script_path_strict",
    "run_subprocess",
]
