"""Structured logging utilities."""

import logging
import logging.handlers
import json
import sys
from typing import Any, Dict, Optional, Type
from datetime import datetime, timezone
from pathlib import Path

# Third-party loggers that are chatty at DEBUG
QUIET_LOGGERS = ("PIL",)


class StructuredFormatter(logging.Formatter):
    """JSON formatter, one object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }

        context = getattr(record, "context", None)
        if context:
            log_data["context"] = context

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(log_data, ensure_ascii=False, default=str)


class DetailedFormatter(logging.Formatter):
    """Human-readable detailed formatter."""

    def __init__(self) -> None:
        fmt = (
            "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | "
            "%(message)s"
        )
        super().__init__(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S")


class SimpleFormatter(logging.Formatter):
    """Console formatter: level and message only."""

    def __init__(self) -> None:
        super().__init__(fmt="%(levelname)-8s %(message)s")


FORMATTERS: Dict[str, Type[logging.Formatter]] = {
    "simple": SimpleFormatter,
    "detailed": DetailedFormatter,
    "json": StructuredFormatter,
}


def setup_logging(
    level: str = "INFO",
    format: str = "simple",
    log_file: Optional[Path] = None,
    max_file_size_mb: int = 10,
    backup_count: int = 5,
) -> None:
    """Configure the root logger.

    Console output goes to stderr in the chosen format. The optional log
    file rotates and is always JSON.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format: Console format (simple, detailed, json)
        log_file: Optional log file path
        max_file_size_mb: Max log file size in MB before rotation
        backup_count: Number of rotated files to keep

    Raises:
        ValueError: If ``format`` is unknown
    """
    if format not in FORMATTERS:
        raise ValueError(f"Unknown log format: {format!r}")

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(FORMATTERS[format]())
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_file_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(StructuredFormatter())
        root_logger.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


class LogContext:
    """Attach structured fields to every record logged inside the block.

    Fields end up under ``context`` in JSON output. Nested contexts merge,
    inner values win.
    """

    def __init__(self, logger: logging.Logger, **fields: Any) -> None:
        self.logger = logger
        self.fields = fields
        self.old_factory = None

    def __enter__(self) -> "LogContext":
        self.old_factory = logging.getLogRecordFactory()
        old_factory = self.old_factory
        fields = self.fields

        def record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
            record = old_factory(*args, **kwargs)
            record.context = {**getattr(record, "context", {}), **fields}
            return record

        logging.setLogRecordFactory(record_factory)
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        logging.setLogRecordFactory(self.old_factory)
