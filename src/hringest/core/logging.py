"""Structured JSON logging for the HR ingest service.

All modules log through ``logging.getLogger(__name__)`` underneath the
``hringest`` logger; ``setup_logging`` attaches the single handler.
"""

from __future__ import annotations

import logging
import sys
import time
from typing import Any

from pythonjsonlogger.json import JsonFormatter

ROOT_LOGGER = "hringest"

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class CustomJsonFormatter(JsonFormatter):
    """JSON formatter adding timestamp, level, logger and call-site fields."""

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        if not log_record.get("timestamp"):
            log_record["timestamp"] = self.formatTime(record, self.datefmt)

        if log_record.get("level"):
            log_record["level"] = log_record["level"].upper()
        else:
            log_record["level"] = record.levelname

        log_record["logger"] = record.name
        log_record["module"] = record.module
        log_record["function"] = record.funcName
        log_record["process_id"] = record.process
        log_record["thread_id"] = record.thread


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Logger:
    """Configure the ``hringest`` logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        fmt: ``"json"`` for structured output, ``"text"`` for local development.

    Returns:
        The configured package logger.
    """
    log_level = LOG_LEVELS.get(level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(log_level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)

    if fmt == "json":
        formatter: logging.Formatter = CustomJsonFormatter(
            fmt="%(timestamp)s %(level)s %(logger)s %(module)s %(function)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


class log_operation:
    """Context manager logging the start, duration and outcome of an operation.

    Usage:
        with log_operation("Persisting batch", logger, batch_id="123"):
            ...
    """

    def __init__(self, operation_name: str, logger: logging.Logger, **extra_fields: Any) -> None:
        self.operation_name = operation_name
        self.logger = logger
        self.extra_fields = extra_fields
        self.start_time = 0.0

    def __enter__(self) -> log_operation:
        self.start_time = time.monotonic()
        self.logger.info(
            f"Starting: {self.operation_name}",
            extra={"operation": self.operation_name, **self.extra_fields},
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        duration = round(time.monotonic() - self.start_time, 3)
        if exc_type is None:
            self.logger.info(
                f"Completed: {self.operation_name}",
                extra={
                    "operation": self.operation_name,
                    "duration_seconds": duration,
                    "status": "success",
                    **self.extra_fields,
                },
            )
        else:
            self.logger.error(
                f"Failed: {self.operation_name}",
                extra={
                    "operation": self.operation_name,
                    "duration_seconds": duration,
                    "status": "error",
                    "error_type": exc_type.__name__,
                    "error_message": str(exc_val),
                    **self.extra_fields,
                },
            )
        return False
