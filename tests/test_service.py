import asyncio
import sys

import pytest

from ai_common_notify.models import NotifyConfig
from ai_common_notify.notify import RecordingTransport
from ai_common_notify.service import DIAGNOSTIC_PREFIX, NotificationService

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="POSIX shell scripts")

BASH_RM = {
    "tool_name": "Bash",
    "tool_input": {"command": "rm -rf build"},
    "transcript_path": "/work/shop/.claude/tmp/s/transcript.jsonl",
}


class SnapshotTransport(RecordingTransport):
    """Records which files exist at the moment the notification is sent."""

    def __init__(self, watched):
        super().__init__()
        self.watched = watched
        self.seen = []

    async def send(self, options):
        self.seen.append({p.name for p in self.watched if p.exists()})
        return await super().send(options)


def _service(tmp_path, config=None, transport=None):
    config = config or NotifyConfig()
    return NotificationService(
        lambda: config,
        transport or RecordingTransport(),
        platform="linux",
        trusted_dirs=[str(tmp_path)],
    )


def _script(tmp_path, name, body):
    path = tmp_path / name
    path.write_text(f"#!/bin/bash\n{body}\n")
    path.chmod(0o755)
    return path


# --- classify_and_process ---


def test_high_impact_bash_end_to_end(tmp_path):
    env_file = tmp_path / "hook.env"
    config = NotifyConfig.model_validate(
        {
            "hooks": {
                "PreToolUse": [
                    {
                        "matcher": "Bash",
                        "actions": [
                            {
                                "type": "command",
                                "command": f'echo "$NOTIFY_EVENT_TYPE|$NOTIFY_URGENCY|$NOTIFY_PROJECT_NAME" > {env_file}',
                            }
                        ],
                    }
                ]
            }
        }
    )
    transport = RecordingTransport()
    sent = asyncio.run(_service(tmp_path, config, transport).classify_and_process(BASH_RM))

    assert sent is True
    (options,) = transport.sent
    assert options.urgency == "critical"
    assert options.title == "⚠️ Claude Tool Request - shop"
    assert "Claude wants to use Bash - Review required!" in options.message
    assert "Command: rm -rf build" in options.message
    assert env_file.read_text().strip() == "PreToolUse|critical|shop"


def test_hooks_and_notify_scripts_finish_before_dispatch(tmp_path):
    hook_marker = tmp_path / "hook.done"
    notify_marker = tmp_path / "notify.done"
    notify_script = _script(tmp_path, "notify.sh", f"sleep 0.2; touch {notify_marker}")
    config = NotifyConfig.model_validate(
        {
            "hooks": {"Stop": [{"actions": [{"type": "command", "command": f"sleep 0.2; touch {hook_marker}"}]}]},
            "scripts": {"notify": [{"path": str(notify_script)}]},
        }
    )
    transport = SnapshotTransport([hook_marker, notify_marker])
    assert asyncio.run(_service(tmp_path, config, transport).classify_and_process({"session_id": "s"}))
    assert transport.seen == [{"hook.done", "notify.done"}]


def test_undetermined_event_sends_nothing(tmp_path):
    transport = RecordingTransport()
    sent = asyncio.run(_service(tmp_path, transport=transport).classify_and_process({"foo": "bar"}))
    assert sent is False
    assert transport.sent == []


def test_event_type_override_and_display_timeout(tmp_path):
    transport = RecordingTransport()
    service = _service(tmp_path, transport=transport)
    sent = asyncio.run(service.classify_and_process('{"foo": "bar"}', event_type="Stop", timeout_seconds=2))
    assert sent
    options = transport.sent[0]
    assert options.title.startswith("Claude Response Complete")
    assert options.timeout == 2


def test_low_urgency_events_are_silent(tmp_path):
    transport = RecordingTransport()
    payload = {"tool_name": "Read", "tool_response": {"ok": True}}
    asyncio.run(_service(tmp_path, transport=transport).classify_and_process(payload))
    assert transport.sent[0].urgency == "low"
    assert transport.sent[0].sound is None


def test_invalid_payload_returns_false(tmp_path):
    assert asyncio.run(_service(tmp_path).classify_and_process("{not json")) is False


def test_config_provider_failure_returns_false(tmp_path):
    def broken():
        raise RuntimeError("config exploded")

    service = NotificationService(broken, RecordingTransport(), platform="linux")
    assert asyncio.run(service.classify_and_process({"session_id": "s"})) is False


def test_failing_notify_script_sends_diagnostic(tmp_path):
    config = NotifyConfig.model_validate({"scripts": {"notify": [{"path": str(tmp_path / "missing.sh")}]}})
    transport = RecordingTransport()
    assert asyncio.run(_service(tmp_path, config, transport).classify_and_process({"session_id": "s"}))
    titles = [o.title for o in transport.sent]
    assert titles[0] == f"{DIAGNOSTIC_PREFIX}Script file not found"
    assert titles[-1].startswith("Claude Response Complete")


# --- send_direct ---


def test_send_direct_runs_notify_scripts(tmp_path):
    out = tmp_path / "out.txt"
    script = _script(tmp_path, "notify.sh", f'echo "$NOTIFY_TITLE|$NOTIFY_URGENCY|$NOTIFY_TOOL_NAME" > {out}')
    config = NotifyConfig.model_validate({"scripts": {"notify": [{"path": str(script)}]}})
    transport = RecordingTransport()
    sent = asyncio.run(
        _service(tmp_path, config, transport).send_direct("Build", "Finished", urgency="low", tool_name="cursor")
    )
    assert sent is True
    assert transport.sent[0].title == "Build"
    assert transport.sent[0].urgency == "low"
    assert out.read_text().strip() == "Build|low|cursor"


def test_send_direct_skips_hooks(tmp_path):
    marker = tmp_path / "hook.done"
    config = NotifyConfig.model_validate(
        {"hooks": {"Notification": [{"actions": [{"type": "command", "command": f"touch {marker}"}]}]}}
    )
    assert asyncio.run(_service(tmp_path, config).send_direct("T", "M"))
    assert not marker.exists()


def test_send_direct_rejects_invalid_options(tmp_path):
    transport = RecordingTransport()
    service = _service(tmp_path, transport=transport)
    assert asyncio.run(service.send_direct("", "M")) is False
    assert asyncio.run(service.send_direct("T", "M", urgency="loud")) is False
    assert transport.sent == []


def test_send_direct_transport_failure(tmp_path):
    service = _service(tmp_path, transport=RecordingTransport(error=OSError("no display")))
    assert asyncio.run(service.send_direct("T", "M")) is False
