from __future__ import annotations

from typing import Annotated, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

ScriptInterpreter = Literal["shell", "node"]


class ScriptAction(BaseModel):
    """Run a script file (.sh, .js, .cjs) with the notification environment."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)
    type: Literal["script"]
    path: str
    enabled: bool = True
    interpreter: ScriptInterpreter | None = None


class CommandAction(BaseModel):
    """Run a shell command line with the notification environment."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)
    type: Literal["command"]
    command: str
    enabled: bool = True


HookAction = Annotated[ScriptAction | CommandAction, Field(discriminator="type")]


class HookRule(BaseModel):
    """Matcher (regex or wildcard) and the actions to run when it matches."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)
    matcher: str = ".*"
    actions: list[HookAction] = Field(
        default_factory=list, validation_alias=AliasChoices("actions", "hooks")
    )


# Event kind -> ordered hook rules.
HooksConfig = dict[str, list[HookRule]]
