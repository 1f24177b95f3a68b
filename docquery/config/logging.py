"""Logging setup for the ``docquery`` logger tree.

Two output styles are supported: a compact pipe-separated line for terminals
and one JSON object per line for log collectors. Pipeline code attaches
structured fields with ``extra=`` (``metrics``, ``namespace``, ``url``,
``question``) and the JSON style carries them through as top-level keys.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

ROOT_LOGGER_NAME = "docquery"

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
TEXT_DATE_FORMAT = "%H:%M:%S"

# Record attributes copied into JSON output when set through ``extra=``
STRUCTURED_FIELDS = ("metrics", "namespace", "url", "question")


class JSONExceptionFormatter(logging.Formatter):
    """Renders each record as a single-line JSON document.

    Exceptions attached to the record are reduced to their type, message and
    formatted traceback.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "source": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        for name in STRUCTURED_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = value

        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            entry["exception"] = {
                "type": type(exc).__name__,
                "message": str(exc),
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(entry, default=str)


def _make_formatter(json_format: bool) -> logging.Formatter:
    if json_format:
        return JSONExceptionFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATE_FORMAT)


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    json_format: bool = False,
) -> logging.Logger:
    """Route ``docquery`` logs to stdout and, optionally, a file.

    Calling this again replaces the previous handlers, so the API lifespan and
    the CLI can both call it safely.

    Args:
        level: Level name; unknown names fall back to INFO.
        log_file: Extra destination; parent directories are created.
        json_format: Emit JSON lines instead of text.

    Returns:
        The ``docquery`` logger.
    """
    app_logger = logging.getLogger(ROOT_LOGGER_NAME)
    app_logger.setLevel(logging.getLevelNamesMapping().get(level.upper(), logging.INFO))
    app_logger.propagate = False
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

    formatter = _make_formatter(json_format)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        app_logger.addHandler(handler)

    return app_logger
