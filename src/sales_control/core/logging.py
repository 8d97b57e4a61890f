"""
Application logging.

Every `sales_control` module logs through `get_logger(__name__)`. Records
carry their structured fields in `extra=`; the JSON formatter writes them
out next to the message, so job runs can be followed per job, date and
recipient in the log stream.
"""

import json
import logging
import sys
from collections.abc import MutableMapping
from datetime import datetime, timezone
from functools import cache
from pathlib import Path
from typing import Any

from .config import settings

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# LogRecord attributes that are not `extra=` fields
_RECORD_ATTRIBUTES = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def record_extras(record: logging.LogRecord) -> dict[str, Any]:
    """Fields attached to a record through `extra=`."""
    return {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRIBUTES}


class JSONFormatter(logging.Formatter):
    """One JSON object per record; Decimal and date extras are written as strings."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data.update(record_extras(record))
        return json.dumps(log_data, default=str)


class ColoredFormatter(logging.Formatter):
    """Text formatter that colors the level name on a terminal."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        color = self.COLORS.get(levelname)
        if color:
            record.levelname = f"{color}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            # Other handlers of the same record must see the plain name
            record.levelname = levelname


def build_formatter(use_json: bool, colored: bool = False) -> logging.Formatter:
    if use_json:
        return JSONFormatter()
    if colored:
        return ColoredFormatter(TEXT_FORMAT)
    return logging.Formatter(TEXT_FORMAT)


def setup_logging(
    name: str,
    level: str | None = None,
    log_file: Path | None = None,
    use_json: bool | None = None,
) -> logging.Logger:
    """
    Configure the logger `name` from settings.

    Args:
        name: Logger name (usually __name__)
        level: Log level, `settings.log_level` when omitted
        log_file: Extra file output, `settings.log_file_path` when omitted
        use_json: JSON records, `settings.log_format == "json"` when omitted

    Returns:
        The logger, with stdout (and optionally file) handlers and no
        propagation to the root logger
    """
    if use_json is None:
        use_json = settings.log_format == "json"
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    log_file = log_file or settings.log_file_path

    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    logger.handlers.clear()

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(build_formatter(use_json, colored=sys.stdout.isatty()))
    handlers.append(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(build_formatter(use_json))
        handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(log_level)
        logger.addHandler(handler)

    logger.propagate = False
    return logger


@cache
def get_logger(name: str) -> logging.Logger:
    """Configured logger for `name`, set up once per name."""
    return setup_logging(name)


class ContextLogger(logging.LoggerAdapter):
    """
    Logger that adds fixed fields to every record.

    Fields passed in a call's `extra=` are merged over the fixed ones.
    """

    def process(self, msg: str, kwargs: MutableMapping[str, Any]) -> tuple[str, MutableMapping[str, Any]]:
        kwargs["extra"] = {**(self.extra or {}), **(kwargs.get("extra") or {})}
        return msg, kwargs


def get_logger_with_context(name: str, **context: Any) -> ContextLogger:
    """`get_logger(name)` that stamps `context` on every record, e.g. `job=...`."""
    return ContextLogger(get_logger(name), context)
