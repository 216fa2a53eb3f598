"""Logging configuration for the catalog service.

Console output for humans, daily ``catalog_YYYYMMDD.jsonl`` files for
structured catalog events (source probes, index builds, reloads).
"""

import json
import logging
import sys
from datetime import datetime
from typing import Any, Dict

from catalog import config

__all__ = [
    "setup_logging",
    "get_logger",
    "log_catalog_event",
]


class CatalogEventFileHandler(logging.Handler):
    """Appends each record as one JSON line to today's catalog log."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry = {
                "timestamp": datetime.now().isoformat(),
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
            }
            if hasattr(record, "event_type"):
                entry["event_type"] = record.event_type
                entry.update(record.event_data)

            config.LOG_DIR.mkdir(parents=True, exist_ok=True)
            log_file = config.LOG_DIR / f"catalog_{datetime.now():%Y%m%d}.jsonl"
            with open(log_file, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry, ensure_ascii=False, default=str) + "\n")
        except Exception:
            self.handleError(record)


class ColoredConsoleHandler(logging.StreamHandler):
    """Colours the level name when writing to a TTY."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = self.COLORS.get(record.levelname)
        if color and getattr(self.stream, "isatty", lambda: False)():
            message = message.replace(record.levelname, f"{color}{record.levelname}{self.RESET}", 1)
        return message


def setup_logging(level: int = logging.INFO, log_to_file: bool = True) -> logging.Logger:
    """Configure the ``catalog`` logger.

    The web app logs events to file; the CLI passes ``log_to_file=False``
    so one-off inspections don't grow the event log.
    """
    logger = logging.getLogger("catalog")
    logger.setLevel(level)
    logger.handlers.clear()

    console_handler = ColoredConsoleHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s", datefmt="%H:%M:%S")
    )
    logger.addHandler(console_handler)

    if log_to_file:
        file_handler = CatalogEventFileHandler()
        file_handler.setLevel(logging.DEBUG)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = "catalog") -> logging.Logger:
    """Get a logger under the ``catalog`` namespace."""
    if name == "catalog" or name.startswith("catalog."):
        return logging.getLogger(name)
    return logging.getLogger(f"catalog.{name}")


def log_catalog_event(event_type: str, data: Dict[str, Any], level: int = logging.INFO) -> None:
    """Log a structured catalog event.

    Args:
        event_type: 'source_probe', 'index_built' or 'reload'
        data: Event fields; an optional 'message' key becomes the log message
        level: Log level
    """
    logger = logging.getLogger("catalog")
    if not logger.isEnabledFor(level):
        return

    record = logger.makeRecord(
        logger.name, level, "(catalog)", 0, data.get("message", event_type), (), None
    )
    record.event_type = event_type
    record.event_data = {k: v for k, v in data.items() if k != "message"}
    logger.handle(record)
