import io
import json
import logging
import sys
from datetime import datetime, timedelta, timezone

from ai_common_notify._log import LOGGER_NAME, read_log_entries, setup_logging

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def _entry(hours_ago, level="INFO", message="m"):
    stamp = (NOW - timedelta(hours=hours_ago)).isoformat()
    return json.dumps({"timestamp": stamp, "level": level, "component": "c", "message": message})


# --- setup ---


def test_setup_logging_writes_json_lines(tmp_path):
    path = setup_logging(tmp_path / "logs", "debug")
    logger = logging.getLogger(f"{LOGGER_NAME}.tests")
    logger.info("hello %s", "world", extra={"details": {"script": "/x.sh"}})
    for handler in logging.getLogger(LOGGER_NAME).handlers:
        handler.flush()

    (entry,) = [json.loads(line) for line in path.read_text().splitlines()]
    assert entry["message"] == "hello world"
    assert entry["level"] == "INFO"
    assert entry["component"] == f"{LOGGER_NAME}.tests"
    assert entry["details"] == {"script": "/x.sh"}


def test_setup_logging_is_idempotent(tmp_path):
    setup_logging(tmp_path, "info")
    count = len(logging.getLogger(LOGGER_NAME).handlers)
    setup_logging(tmp_path, "warning")
    assert len(logging.getLogger(LOGGER_NAME).handlers) == count
    assert logging.getLogger(LOGGER_NAME).level == logging.WARNING


def test_exceptions_are_recorded(tmp_path):
    path = setup_logging(tmp_path, "info")
    try:
        raise ValueError("bad")
    except ValueError:
        logging.getLogger(f"{LOGGER_NAME}.tests").exception("failed")
    for handler in logging.getLogger(LOGGER_NAME).handlers:
        handler.flush()
    entry = json.loads(path.read_text().splitlines()[-1])
    assert entry["level"] == "ERROR"
    assert "ValueError: bad" in entry["details"]["exception"]


# --- reading ---


def test_read_keeps_recent_entries_and_skips_garbage(tmp_path):
    path = tmp_path / "notify.log"
    path.write_text("\n".join([_entry(30, message="old"), "not json", "[1]", _entry(1, message="new")]) + "\n")
    entries = read_log_entries(path, 24, now=NOW)
    assert [e["message"] for e in entries] == ["new"]


def test_read_level_filter(tmp_path):
    path = tmp_path / "notify.log"
    path.write_text(
        "\n".join([_entry(1, "INFO", "i"), _entry(1, "WARNING", "w"), _entry(1, "ERROR", "e")]) + "\n"
    )
    assert [e["message"] for e in read_log_entries(path, 24, "error", now=NOW)] == ["e"]
    assert [e["message"] for e in read_log_entries(path, 24, "warning", now=NOW)] == ["w", "e"]


def test_read_missing_file(tmp_path):
    assert read_log_entries(tmp_path / "none.log") == []


def test_stderr_output_follows_current_stream(tmp_path, monkeypatch):
    setup_logging(tmp_path, "info")
    (handler,) = [
        h for h in logging.getLogger(LOGGER_NAME).handlers if type(h).__name__ == "_StderrHandler"
    ]
    first, second = io.StringIO(), io.StringIO()
    monkeypatch.setattr(sys, "stderr", first)
    logging.getLogger(f"{LOGGER_NAME}.tests").warning("one")
    first.close()
    monkeypatch.setattr(sys, "stderr", second)
    logging.getLogger(f"{LOGGER_NAME}.tests").warning("two")
    handler.flush()

    assert "WARNING two" in second.getvalue()
    assert handler.setStream(io.StringIO()) is not None
