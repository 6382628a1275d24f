"""
Logging for site builds.

Console output goes through rich; the build log file is JSONL (or plain
text). Every record carries the id of the build that emitted it and the
milliseconds elapsed since logging was set up for that build.
"""

from __future__ import annotations

import json
import logging
import time
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rich.logging import RichHandler

from .config import LoggingConfig


def setup_logging(
    cfg: LoggingConfig, log_dir: Path | None, build_id: str | None = None
) -> logging.Logger:
    """Configure the "blog_site" logger for one build.

    Args:
        cfg: Logging configuration
        log_dir: Directory for the build log file, ``None`` to skip the file
        build_id: Id stamped on every record (random when omitted)
    """
    logger = logging.getLogger("blog_site")
    logger.setLevel(_level_from_string(cfg.level))
    logger.handlers = []
    logger.filters = []
    logger.propagate = False
    logger.addFilter(BuildContextFilter(build_id or uuid.uuid4().hex[:12]))

    if cfg.console:
        console_handler = RichHandler(rich_tracebacks=True, show_time=False, show_level=True)
        console_handler.setLevel(_level_from_string(cfg.level))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(console_handler)

    if cfg.file and log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_path = log_dir / cfg.filename
        file_handler = logging.FileHandler(file_path, encoding="utf-8")
        file_handler.setLevel(_level_from_string(cfg.level))
        file_handler.setFormatter(_build_file_formatter(cfg.format))
        logger.addHandler(file_handler)

    return logger


def close_logging(logger: logging.Logger) -> None:
    """Flush and detach handlers so log files are released after a build."""
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


class BuildContextFilter(logging.Filter):
    def __init__(self, build_id: str):
        super().__init__()
        self.build_id = build_id
        self.started = time.monotonic()

    def filter(self, record: logging.LogRecord) -> bool:
        record.build_id = self.build_id
        record.elapsed_ms = round((time.monotonic() - self.started) * 1000)
        return True


def log_event(logger: logging.Logger | None, message: str, **fields: Any) -> None:
    if logger is None:
        return
    logger.info(message, extra=fields)


class JsonlFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_extract_extras(record))
        return json.dumps(payload, ensure_ascii=True, default=str)


_RESERVED = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "message",
    "taskName",
}


def _extract_extras(record: logging.LogRecord) -> dict[str, Any]:
    extras = {}
    for key, value in record.__dict__.items():
        if key in _RESERVED:
            continue
        extras[key] = value
    return extras


def _build_file_formatter(fmt: str) -> logging.Formatter:
    if fmt == "jsonl":
        return JsonlFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s [%(build_id)s] %(message)s")


def _level_from_string(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)
