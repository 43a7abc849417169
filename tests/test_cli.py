import json
from datetime import datetime, timezone

from click.testing import CliRunner

from ai_common_notify.cli import TEST_TITLE, cli
from ai_common_notify.loaders import CONFIG_PATH_ENV
from ai_common_notify.models import NotifyConfig
from ai_common_notify.notify import RecordingTransport
from ai_common_notify.service import NotificationService

BASH_LS = json.dumps({"tool_name": "Bash", "tool_input": {"command": "ls"}, "project_name": "shop", "project_path": "/work/shop"})


def _invoke(tmp_path, args, input=None, transport=None, config=None):
    config = config or NotifyConfig()
    transport = transport if transport is not None else RecordingTransport()
    service = NotificationService(lambda: config, transport, platform="linux", trusted_dirs=[str(tmp_path)])
    obj = {"config": config, "log_dir": tmp_path / "logs", "service": service}
    result = CliRunner().invoke(cli, args, input=input, obj=obj)
    return result, transport


# --- hook ---


def test_hook_sends_notification(tmp_path):
    result, transport = _invoke(tmp_path, ["hook"], input=BASH_LS)
    assert result.exit_code == 0, result.output
    (options,) = transport.sent
    assert options.title == "⚠️ Claude Tool Request - shop"


def test_hook_empty_input(tmp_path):
    result, transport = _invoke(tmp_path, ["hook"], input="")
    assert result.exit_code == 1
    assert transport.sent == []


def test_hook_invalid_json(tmp_path):
    result, _ = _invoke(tmp_path, ["hook"], input="{nope")
    assert result.exit_code == 1
    assert "Invalid JSON payload" in result.output


def test_hook_undetermined_is_usage_error(tmp_path):
    result, transport = _invoke(tmp_path, ["hook"], input='{"foo": 1}')
    assert result.exit_code == 2
    assert "--event-type" in result.output
    assert transport.sent == []


def test_hook_event_type_option(tmp_path):
    result, transport = _invoke(tmp_path, ["hook", "-e", "Stop", "--timeout", "3"], input='{"foo": 1}')
    assert result.exit_code == 0
    assert transport.sent[0].title.startswith("Claude Response Complete")
    assert transport.sent[0].timeout == 3


def test_hook_failed_notification_still_exits_zero(tmp_path):
    result, _ = _invoke(tmp_path, ["hook"], input=BASH_LS, transport=RecordingTransport(result=False))
    assert result.exit_code == 0
    assert "Warning: notification was not sent" in result.output


# --- send / test ---


def test_send(tmp_path):
    result, transport = _invoke(
        tmp_path, ["send", "Build", "Finished", "--urgency", "low", "--timeout", "4", "--no-sound"]
    )
    assert result.exit_code == 0, result.output
    assert "Notification sent" in result.output
    options = transport.sent[0]
    assert (options.title, options.message, options.urgency, options.timeout, options.sound) == (
        "Build",
        "Finished",
        "low",
        4,
        None,
    )


def test_send_rejects_unknown_urgency(tmp_path):
    result, transport = _invoke(tmp_path, ["send", "T", "M", "--urgency", "loud"])
    assert result.exit_code == 2
    assert transport.sent == []


def test_send_failure_exits_one(tmp_path):
    result, _ = _invoke(tmp_path, ["send", "T", "M"], transport=RecordingTransport(result=False))
    assert result.exit_code == 1


def test_test_command(tmp_path):
    result, transport = _invoke(tmp_path, ["test"])
    assert result.exit_code == 0
    assert transport.sent[0].title == TEST_TITLE


# --- check-config ---


def test_check_config_file(tmp_path):
    good = tmp_path / "good.json"
    good.write_text(json.dumps({"notifications": {"defaultTimeout": 5}}))
    result, _ = _invoke(tmp_path, ["check-config", "--file", str(good)])
    assert result.exit_code == 0
    assert "Configuration is valid" in result.output

    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"scripts": {"timeout": 0}}))
    result, _ = _invoke(tmp_path, ["check-config", "--file", str(bad)])
    assert result.exit_code == 1
    assert "error: scripts.timeout" in result.output


def test_check_config_merged(tmp_path, monkeypatch):
    global_file = tmp_path / "global.json"
    global_file.write_text(json.dumps({"notifications": {"defaultUrgency": "low"}}))
    (tmp_path / ".ai-notify.json").write_text(json.dumps({"notifications": {"defaultUrgency": "loud"}}))
    monkeypatch.setenv(CONFIG_PATH_ENV, str(global_file))
    monkeypatch.chdir(tmp_path)
    result, _ = _invoke(tmp_path, ["check-config"])
    assert result.exit_code == 1
    assert "notifications.defaultUrgency" in result.output


# --- logs ---


def test_logs(tmp_path):
    log_dir = tmp_path / "logs"
    log_dir.mkdir()
    now = datetime.now(timezone.utc).isoformat()
    lines = [
        {"timestamp": now, "level": "INFO", "component": "c", "message": "all good"},
        {"timestamp": now, "level": "ERROR", "component": "c", "message": "it broke", "details": {"code": 2}},
    ]
    (log_dir / "notify.log").write_text("".join(json.dumps(line) + "\n" for line in lines))

    result, _ = _invoke(tmp_path, ["logs"])
    assert "all good" in result.output
    assert "it broke" in result.output

    result, _ = _invoke(tmp_path, ["logs", "--errors"])
    assert "all good" not in result.output
    assert "[ERROR] c: it broke" in result.output


def test_logs_empty(tmp_path):
    result, _ = _invoke(tmp_path, ["logs", "--hours", "1"])
    assert result.exit_code == 0
    assert "No log entries found" in result.output


# --- init ---


def test_init_writes_claude_settings(tmp_path):
    (tmp_path / ".claude").mkdir()
    result, _ = _invoke(tmp_path, ["init", "--project-root", str(tmp_path), "--event", "Stop"])
    assert result.exit_code == 0, result.output
    assert "Added Stop hook" in result.output
    data = json.loads((tmp_path / ".claude" / "settings.json").read_text())
    assert list(data["hooks"]) == ["Stop"]


def test_init_unsupported_tool(tmp_path):
    result, _ = _invoke(tmp_path, ["init", "--tool", "vim", "--project-root", str(tmp_path)])
    assert result.exit_code == 1
    assert "Unsupported tool: vim" in result.output
