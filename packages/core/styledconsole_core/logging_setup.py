"""JSON-lines logging for the console session, plus crash hooks.

Records from every ``styledconsole.*`` logger (parser, capture bridge, UI
dispatch, app) end up in one rotating file under the config root. Calling
:func:`configure_logging` again retunes the existing handlers, so the CLI can
log early and the window can apply ``DiagnosticsConfig`` once it is loaded.
"""

from __future__ import annotations

import faulthandler
import json
import logging
import logging.handlers
import os
import sys
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .config import DiagnosticsConfig, config_root

_LOGGER_NAME = "styledconsole"
LOG_FILE_NAME = "styledconsole.log"
_CONSOLE_HANDLER = "styledconsole.stderr"

# Structured ``extra=`` keys copied into the payload when a record carries them.
_PAYLOAD_FIELDS = ("event", "crash_id", "length")

_fault_file = None


def log_dir() -> Path:
    path = config_root() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts_utc": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "thread": record.threadName,
            "msg": record.getMessage(),
        }
        for key in _PAYLOAD_FIELDS:
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True)


def _level(name: str) -> int:
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else logging.INFO


def _file_handler(logger: logging.Logger) -> logging.handlers.TimedRotatingFileHandler | None:
    for handler in logger.handlers:
        if isinstance(handler, logging.handlers.TimedRotatingFileHandler):
            return handler
    return None


def _console_handler(logger: logging.Logger) -> logging.Handler | None:
    for handler in logger.handlers:
        if handler.get_name() == _CONSOLE_HANDLER:
            return handler
    return None


def configure_logging(
    keep_files: int = 7,
    console: bool = True,
    level: str = "INFO",
    directory: Path | None = None,
) -> logging.Logger:
    """Set up (or retune) the ``styledconsole`` logger.

    The file handler is replaced only when the target file changes; otherwise
    its rotation count is updated in place. ``console`` adds a stderr handler
    if one is missing and never removes one that is already attached.
    """

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(_level(level))
    backups = max(2, keep_files)
    path = (directory or log_dir()) / LOG_FILE_NAME

    handler = _file_handler(logger)
    if handler is not None and handler.baseFilename != os.path.abspath(path):
        logger.removeHandler(handler)
        handler.close()
        handler = None
    if handler is None:
        handler = logging.handlers.TimedRotatingFileHandler(
            filename=str(path),
            when="midnight",
            backupCount=backups,
            encoding="utf-8",
        )
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)
    else:
        handler.backupCount = backups

    if console and _console_handler(logger) is None:
        stream_handler = logging.StreamHandler()
        stream_handler.set_name(_CONSOLE_HANDLER)
        stream_handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(stream_handler)

    logger.info(
        "logging configured level=%s keep=%d",
        logging.getLevelName(logger.level),
        backups,
        extra={"event": "logging_configured"},
    )
    return logger


def configure_from(diagnostics: DiagnosticsConfig, console: bool = True) -> logging.Logger:
    return configure_logging(
        keep_files=diagnostics.keep_log_files,
        console=console,
        level=diagnostics.log_level,
    )


def get_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)


def _install_fault_handler(logger: logging.Logger) -> None:
    global _fault_file
    if _fault_file is not None:
        return
    _fault_file = (log_dir() / "fault.log").open("a", encoding="utf-8")
    faulthandler.enable(file=_fault_file, all_threads=True)
    logger.info("fault handler enabled", extra={"event": "fault_handler_enabled"})


def install_crash_hooks() -> None:
    """Log uncaught exceptions, including ones raised on the script thread."""

    logger = get_logger()

    def _report(event: str, where: str, exc_info) -> None:
        crash_id = str(uuid.uuid4())
        logger.critical(
            f"{where} crashed crash_id={crash_id}",
            exc_info=exc_info,
            extra={"event": event, "crash_id": crash_id},
        )

    def _log_uncaught(exc_type, exc_value, exc_tb) -> None:
        _report("uncaught_exception", "main thread", (exc_type, exc_value, exc_tb))

    def _thread_hook(args: threading.ExceptHookArgs) -> None:
        name = args.thread.name if args.thread else "?"
        _report("thread_exception", f"thread {name}", (args.exc_type, args.exc_value, args.exc_traceback))

    sys.excepthook = _log_uncaught
    threading.excepthook = _thread_hook
    _install_fault_handler(logger)
