"""Command line interface: ``ai-common-notify``.

Commands:
    hook          read a hook payload from stdin, run hooks, notify
    send          send a notification directly
    test          send a fixed test notification
    check-config  validate the merged configuration
    logs          show recent log entries
    init          install hook entries for an AI tool
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import click

from ._log import LOG_FILE_NAME, read_log_entries, setup_logging
from .errors import ConfigLoadError, PayloadError, UnsupportedToolError
from .events import classify
from .loaders.config import global_config_path, load_config, load_raw_config
from .models.config import NotifyConfig
from .models.event import EventPayload
from .models.notification import URGENCIES
from .service import NotificationService
from .setup import DEFAULT_COMMAND, DEFAULT_EVENTS, SUPPORTED_TOOLS, install_hooks
from .validation import validate_config, validate_config_file

TEST_TITLE = "AI Common Notify"
TEST_MESSAGE = "Test notification - ai-common-notify is working"


def _state(ctx: click.Context) -> dict[str, Any]:
    return ctx.ensure_object(dict)


def _config(ctx: click.Context) -> NotifyConfig:
    state = _state(ctx)
    if "config" not in state:
        state["config"] = load_config()
    return state["config"]


def _log_dir(ctx: click.Context) -> Path:
    return Path(_state(ctx).get("log_dir") or global_config_path().parent)


def _service(ctx: click.Context) -> NotificationService:
    state = _state(ctx)
    if "service" not in state:
        config = _config(ctx)
        state["service"] = NotificationService(lambda: config)
    return state["service"]


@click.group()
@click.version_option(package_name="ai-common-notify", prog_name="ai-common-notify")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Desktop notifications and hook scripts for AI coding assistants."""
    config = _config(ctx)
    setup_logging(_log_dir(ctx), config.logging.level)


@cli.command()
@click.option("--event-type", "-e", default=None, help="Event kind; skips classification.")
@click.option("--timeout", type=float, default=None, help="Notification display timeout in seconds.")
@click.pass_context
def hook(ctx: click.Context, event_type: str | None, timeout: float | None) -> None:
    """Handle a hook event read as JSON from stdin."""
    data = click.get_text_stream("stdin").read()
    if not data.strip():
        click.echo("Error: no input received on stdin", err=True)
        ctx.exit(1)
    try:
        payload = EventPayload.from_raw(data)
    except PayloadError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    if not event_type and classify(payload) is None:
        raise click.UsageError("Could not determine the event type from the input; pass --event-type")

    sent = asyncio.run(_service(ctx).classify_and_process(data, event_type, timeout))
    if not sent:
        # The calling tool must never be blocked by a failed notification.
        click.echo("Warning: notification was not sent", err=True)


@cli.command()
@click.argument("title")
@click.argument("message")
@click.option("--urgency", "-u", type=click.Choice(URGENCIES), default=None)
@click.option("--timeout", "-t", type=float, default=None, help="Display timeout in seconds.")
@click.option("--sound/--no-sound", default=None)
@click.option("--icon", default=None, help="Path to an icon file.")
@click.option("--tool", "tool_name", default=None, help="Tool name used to pick a configured icon.")
@click.option("--project", "project_name", default=None)
@click.pass_context
def send(
    ctx: click.Context,
    title: str,
    message: str,
    urgency: str | None,
    timeout: float | None,
    sound: bool | None,
    icon: str | None,
    tool_name: str | None,
    project_name: str | None,
) -> None:
    """Send a notification directly."""
    sent = asyncio.run(
        _service(ctx).send_direct(
            title,
            message,
            urgency=urgency,
            timeout=timeout,
            sound=sound,
            icon=icon,
            tool_name=tool_name,
            project_name=project_name,
        )
    )
    if not sent:
        click.echo("Error: notification was not sent", err=True)
        ctx.exit(1)
    click.echo("Notification sent")


@cli.command("test")
@click.pass_context
def test_notification(ctx: click.Context) -> None:
    """Send a test notification."""
    sent = asyncio.run(_service(ctx).send_direct(TEST_TITLE, TEST_MESSAGE, urgency="normal"))
    if not sent:
        click.echo("Error: test notification was not sent", err=True)
        ctx.exit(1)
    click.echo("Test notification sent")


@cli.command("check-config")
@click.option(
    "--file",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Validate this file instead of the merged configuration.",
)
@click.pass_context
def check_config(ctx: click.Context, config_file: Path | None) -> None:
    """Validate the configuration and list any problems."""
    try:
        result = validate_config_file(config_file) if config_file else validate_config(load_raw_config())
    except ConfigLoadError as e:
        raise click.ClickException(str(e)) from e
    for issue in result.issues:
        click.echo(f"{issue.level}: {issue}")
    if not result.valid:
        click.echo(f"Configuration has {len(result.errors)} error(s)", err=True)
        ctx.exit(1)
    click.echo("Configuration is valid")


@cli.command()
@click.option("--errors", "errors_only", is_flag=True, help="Only show errors.")
@click.option("--hours", type=float, default=None, help="How far back to look (default: logging.retentionHours).")
@click.pass_context
def logs(ctx: click.Context, errors_only: bool, hours: float | None) -> None:
    """Show recent log entries."""
    retention = hours if hours is not None else _config(ctx).logging.retention_hours
    entries = read_log_entries(
        _log_dir(ctx) / LOG_FILE_NAME, retention, level="error" if errors_only else None
    )
    if not entries:
        click.echo("No log entries found")
        return
    for entry in entries:
        click.echo(f"{entry['timestamp']} [{entry.get('level')}] {entry.get('component')}: {entry.get('message')}")
        if entry.get("details"):
            click.echo(f"    {entry['details']}")


@cli.command()
@click.option("--tool", default=SUPPORTED_TOOLS[0], show_default=True, help="AI tool to configure.")
@click.option("--event", "events", multiple=True, help=f"Hook event (default: {', '.join(DEFAULT_EVENTS)}).")
@click.option("--command", default=DEFAULT_COMMAND, show_default=True, help="Command the hook runs.")
@click.option(
    "--project-root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project directory (default: current directory).",
)
def init(tool: str, events: tuple[str, ...], command: str, project_root: Path | None) -> None:
    """Install ai-common-notify hooks into an AI tool's settings."""
    try:
        result = install_hooks(tool, project_root or Path.cwd(), events or DEFAULT_EVENTS, command)
    except (UnsupportedToolError, ConfigLoadError) as e:
        raise click.ClickException(str(e)) from e
    for event in result.added:
        click.echo(f"Added {event} hook")
    for event in result.skipped:
        click.echo(f"{event} hook already installed")
    click.echo(f"Settings: {result.path}")


def main() -> None:
    cli()
