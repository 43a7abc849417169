"""Logging setup: JSON lines to a rotating file, warnings and errors to stderr."""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

LOGGER_NAME = "ai_common_notify"
LOG_FILE_NAME = "notify.log"

_installed: list[logging.Handler] = []
_installed_path: Path | None = None


class _StderrHandler(logging.StreamHandler):
    """Writes to whatever ``sys.stderr`` is when a record is emitted."""

    def emit(self, record: logging.LogRecord) -> None:
        self.stream = sys.stderr
        super().emit(record)

    def flush(self) -> None:
        self.stream = sys.stderr
        super().flush()


class JSONLineFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, component, message, details."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "component": record.name,
            "message": record.getMessage(),
        }
        details = getattr(record, "details", None)
        if details:
            entry["details"] = details
        if record.exc_info:
            entry.setdefault("details", {})
            entry["details"] = {**entry["details"], "exception": self.formatException(record.exc_info)}
        return json.dumps(entry, default=str, ensure_ascii=False)


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(log_dir: Path, level: str = "info") -> Path:
    """Attach the file and stderr handlers to the package logger.

    Calling it again for the same directory only updates the level; a new
    directory replaces the previous handlers. Returns the log file path. If
    the log directory cannot be created only the stderr handler is installed.
    """
    global _installed_path
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_level(level))
    log_path = log_dir / LOG_FILE_NAME

    if _installed_path == log_path:
        return log_path
    for old in _installed:
        logger.removeHandler(old)
        old.close()
    _installed.clear()
    _installed_path = log_path

    stderr = _StderrHandler()
    stderr.setLevel(logging.WARNING)
    stderr.setFormatter(logging.Formatter("[ai-common-notify] %(levelname)s %(message)s"))
    logger.addHandler(stderr)
    _installed.append(stderr)

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            log_path, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8",
        )
    except OSError as e:
        logger.warning("File logging disabled, cannot open %s: %s", log_path, e)
        return log_path
    handler.setFormatter(JSONLineFormatter())
    logger.addHandler(handler)
    _installed.append(handler)
    return log_path


def read_log_entries(
    path: Path,
    retention_hours: float = 24,
    level: str | None = None,
    *,
    now: datetime | None = None,
) -> list[dict[str, Any]]:
    """Entries from the last ``retention_hours``, oldest first.

    ``level`` keeps only entries at that level or above. Lines that are not
    JSON log entries are skipped.
    """
    if not path.is_file():
        return []
    cutoff = (now or datetime.now(timezone.utc)) - timedelta(hours=retention_hours)
    min_level = _level(level) if level else logging.NOTSET
    entries: list[dict[str, Any]] = []
    with path.open(encoding="utf-8", errors="replace") as f:
        for line in f:
            try:
                entry = json.loads(line)
                timestamp = datetime.fromisoformat(entry["timestamp"])
            except (json.JSONDecodeError, KeyError, TypeError, ValueError):
                continue
            if timestamp.tzinfo is None:
                timestamp = timestamp.replace(tzinfo=timezone.utc)
            if timestamp < cutoff:
                continue
            if _level(str(entry.get("level", "info"))) < min_level:
                continue
            entries.append(entry)
    return entries
