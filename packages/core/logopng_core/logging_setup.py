"""JSON-line logging driven by the diagnostics config section."""

from __future__ import annotations

import faulthandler
import json
import logging
import logging.handlers
import sys
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .config import AppConfig


_LOGGER_NAME = "logopng"
_LOG_FILE = "logopng.log"

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RECORD_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per line; ``extra`` fields are copied through verbatim."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts_utc": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def configure_logging(cfg: AppConfig, console: bool = False) -> Path:
    """(Re)install the package handlers and return the active log file.

    Calling it again, e.g. after the config changed, replaces the handlers
    installed by the previous call.
    """
    logger = get_logger()
    for handler in [h for h in logger.handlers if getattr(h, "_logopng", False)]:
        logger.removeHandler(handler)
        handler.close()

    directory = cfg.log_directory()
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / _LOG_FILE

    file_handler = logging.handlers.TimedRotatingFileHandler(
        filename=str(path),
        when="midnight",
        backupCount=cfg.diagnostics.keep_log_files,
        encoding="utf-8",
    )
    file_handler.setFormatter(JsonFormatter())
    handlers: list[logging.Handler] = [file_handler]
    if console:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(logging.Formatter("%(levelname)s %(name)s %(message)s"))
        handlers.append(stream_handler)

    for handler in handlers:
        handler._logopng = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    logger.setLevel(cfg.diagnostics.log_level)

    logger.info(f"logging to {path}", extra={"event": "logging_configured"})
    return path


def get_logger(name: str | None = None) -> logging.Logger:
    if name:
        return logging.getLogger(f"{_LOGGER_NAME}.{name}")
    return logging.getLogger(_LOGGER_NAME)


def install_crash_hooks(cfg: AppConfig) -> None:
    """Log uncaught exceptions from any thread and dump native faults next to the log."""
    logger = get_logger()

    def _report(event: str, exc_info) -> None:
        crash_id = uuid.uuid4().hex
        logger.critical(f"{event} crash_id={crash_id}", exc_info=exc_info, extra={"event": event, "crash_id": crash_id})

    sys.excepthook = lambda *exc_info: _report("uncaught_exception", exc_info)
    threading.excepthook = lambda args: _report(
        "thread_exception", (args.exc_type, args.exc_value, args.exc_traceback)
    )

    directory = cfg.log_directory()
    directory.mkdir(parents=True, exist_ok=True)
    faulthandler.enable(file=(directory / "fault.log").open("a", encoding="utf-8"), all_threads=True)
