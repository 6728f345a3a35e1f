"""
Logging setup for the trial management package.

Repository failures are logged as one ERROR line carrying the raw
exception message and an ``operation`` field naming the repository
method. With JSON output enabled each line is a single JSON object.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from trial_management.core.config import settings

# Attributes every LogRecord carries; anything else came in through `extra`
_RESERVED_ATTRS = {
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "message", "pathname", "process", "processName", "relativeCreated",
    "thread", "threadName", "exc_info", "exc_text", "stack_info",
    "taskName",
}


class JSONFormatter(logging.Formatter):
    """
    Render a log record as one JSON object.

    Always present: timestamp (UTC ISO 8601), level, message, logger.
    Exception and stack text are added when the record has them, and
    every ``extra`` field is copied through. Values json can't encode
    are written with str().

    Example output:
        {"timestamp": "2026-10-18T10:30:00.123456+00:00", "level": "ERROR",
         "message": "UNIQUE constraint failed: organizations.id",
         "logger": "trial_management.repositories.trial_management",
         "operation": "add_organization"}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if record.stack_info:
            log_data["stack_info"] = self.formatStack(record.stack_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and key not in log_data:
                log_data[key] = value

        return json.dumps(log_data, default=str)


def setup_logging(
    level: Optional[str] = None,
    json_format: Optional[bool] = None
) -> None:
    """
    Send all logging to stdout through a single root handler.

    Args:
        level: Root level name; defaults to settings.log_level
        json_format: JSON lines (True) or plain text (False); defaults to
            settings.log_json

    Note:
        Existing root handlers are replaced, so call this once when the
        host application or script starts.
    """
    if level is None:
        level = settings.log_level
    if json_format is None:
        json_format = settings.log_json

    root_logger = logging.getLogger()

    log_level = getattr(logging, level.upper(), logging.INFO)
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    if json_format:
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Driver and engine chatter stays out unless it is a warning
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` (usually the module's __name__)."""
    return logging.getLogger(name)
