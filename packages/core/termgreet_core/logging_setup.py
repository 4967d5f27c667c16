"""Structured local logging and crash hook setup."""

from __future__ import annotations

import faulthandler
import json
import logging
import logging.handlers
import sys
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .config import config_root

_LOGGER_NAME = "termgreet"


def log_dir() -> Path:
    path = config_root() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts_utc": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        if hasattr(record, "event"):
            payload["event"] = getattr(record, "event")
        return json.dumps(payload, ensure_ascii=True)


def configure_logging(keep_files: int = 7, console: bool = False, file: bool = True) -> logging.Logger:
    logger = logging.getLogger(_LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG if console else logging.INFO)
    logger.propagate = False

    if file:
        try:
            path = log_dir() / "termgreet.log"
            handler = logging.handlers.TimedRotatingFileHandler(
                filename=str(path),
                when="midnight",
                backupCount=max(2, keep_files),
                encoding="utf-8",
            )
        except OSError:
            # Read-only home: keep running with console logging only.
            handler = None
        if handler is not None:
            handler.setFormatter(JsonFormatter())
            logger.addHandler(handler)

    if console:
        # stdout carries the rendered frame
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
        logger.addHandler(stream_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    logger.debug("logging configured", extra={"event": "logging_configured"})
    return logger


def get_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)


def _install_fault_handler(logger: logging.Logger) -> None:
    fault_path = log_dir() / "fault.log"
    fh = fault_path.open("a", encoding="utf-8")
    faulthandler.enable(file=fh)
    logger.debug("fault handler enabled", extra={"event": "fault_handler_enabled"})


def install_crash_hooks() -> None:
    logger = get_logger()

    def _log_uncaught(exc_type, exc_value, exc_tb) -> None:
        crash_id = str(uuid.uuid4())
        logger.critical(
            f"uncaught exception crash_id={crash_id}",
            exc_info=(exc_type, exc_value, exc_tb),
            extra={"event": "uncaught_exception", "crash_id": crash_id},
        )
        sys.__excepthook__(exc_type, exc_value, exc_tb)

    sys.excepthook = _log_uncaught
    try:
        _install_fault_handler(logger)
    except OSError:
        logger.debug("fault handler unavailable", extra={"event": "fault_handler_unavailable"})
