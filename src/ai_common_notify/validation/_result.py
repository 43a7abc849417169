from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

Level = Literal["error", "warning"]


@dataclass(frozen=True)
class ValidationIssue:
    level: Level
    path: str  # dotted config path or option name
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass
class ValidationResult:
    """Findings from validating a configuration or a set of notification options.

    Attributes:
        issues: All errors and warnings, in the order found.
        valid: True if there are no errors (warnings are allowed).
    """

    issues: list[ValidationIssue] = field(default_factory=list)

    def error(self, path: str, message: str) -> None:
        self.issues.append(ValidationIssue("error", path, message))

    def warning(self, path: str, message: str) -> None:
        self.issues.append(ValidationIssue("warning", path, message))

    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.level == "error"]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.level == "warning"]
