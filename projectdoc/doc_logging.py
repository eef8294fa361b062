"""Logging and observability utilities for projectdoc.

Structured logging for the document engine and its callers: a console and
JSON-file logging setup, an in-memory timing monitor, and hooks that let
collaborators react to document events (edits, undo, saves).
"""

from __future__ import annotations

import json
import logging as std_logging
import os
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

LOGGER_NAME = "projectdoc"
LOG_LEVEL_ENV = "PROJECTDOC_LOG_LEVEL"
LOG_FILE_ENV = "PROJECTDOC_LOG_FILE"


def setup_logging(
    log_level: Union[str, int, None] = None,
    log_file: Optional[Path] = None,
) -> std_logging.Logger:
    """Configure the ``projectdoc`` logger.

    Level and file default to ``PROJECTDOC_LOG_LEVEL`` / ``PROJECTDOC_LOG_FILE``.
    Console output uses a detailed text format; the optional file gets one
    JSON object per record.
    """
    if log_level is None:
        log_level = os.getenv(LOG_LEVEL_ENV, "INFO")
    if isinstance(log_level, str):
        log_level = log_level.upper()
    if log_file is None and os.getenv(LOG_FILE_ENV):
        log_file = Path(os.environ[LOG_FILE_ENV]).expanduser()

    logger = std_logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)
    logger.handlers.clear()

    console_handler = std_logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        std_logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(console_handler)

    if log_file:
        file_handler = std_logging.FileHandler(log_file)
        file_handler.setLevel(std_logging.DEBUG)
        file_handler.setFormatter(JsonFormatter())
        logger.addHandler(file_handler)

    logger.debug("projectdoc logging initialized")
    return logger


class JsonFormatter(std_logging.Formatter):
    """Render log records as single-line JSON objects."""

    def format(self, record: std_logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        if hasattr(record, "extra_fields"):
            entry.update(record.extra_fields)
        return json.dumps(entry, default=str)


class PerformanceMonitor:
    """Keep timing samples for engine operations in memory."""

    def __init__(self):
        self.metrics: Dict[str, List[Dict[str, Any]]] = {}

    def record_metric(self, name: str, value: Any, tags: Optional[Dict[str, str]] = None) -> None:
        sample = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "name": name,
            "value": value,
            "tags": tags or {},
        }
        self.metrics.setdefault(name, []).append(sample)
        std_logging.getLogger(f"{LOGGER_NAME}.performance").debug(
            f"Metric recorded: {name}={value}", extra={"extra_fields": sample}
        )

    def get_metrics(self, name: Optional[str] = None) -> Dict[str, List[Dict[str, Any]]]:
        if name:
            return {name: self.metrics.get(name, [])}
        return self.metrics.copy()

    def reset(self) -> None:
        self.metrics.clear()


performance_monitor = PerformanceMonitor()


def log_performance(operation_name: str):
    """Decorator recording the duration and outcome of ``operation_name``."""

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = std_logging.getLogger(f"{LOGGER_NAME}.performance")
            start_time = time.time()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration = time.time() - start_time
                performance_monitor.record_metric(
                    f"{operation_name}_duration",
                    duration,
                    {"status": "error", "error_type": type(e).__name__},
                )
                logger.error(
                    f"Failed operation: {operation_name} after {duration:.3f}s - {e}",
                    extra={"extra_fields": {
                        "operation": operation_name,
                        "duration": duration,
                        "status": "error",
                        "error_type": type(e).__name__,
                    }},
                    exc_info=True,
                )
                raise
            duration = time.time() - start_time
            performance_monitor.record_metric(
                f"{operation_name}_duration", duration, {"status": "success"}
            )
            logger.debug(f"Completed operation: {operation_name} in {duration:.3f}s")
            return result

        return wrapper

    return decorator


@contextmanager
def log_operation(operation_name: str, **extra_fields):
    """Log the start, end and failure of a block of work."""
    logger = std_logging.getLogger(f"{LOGGER_NAME}.operations")
    start_time = time.time()
    logger.info(f"Starting operation: {operation_name}", extra={"extra_fields": {
        "operation": operation_name,
        "status": "started",
        **extra_fields,
    }})
    try:
        yield
    except Exception as e:
        duration = time.time() - start_time
        logger.error(f"Failed operation: {operation_name} after {duration:.3f}s - {e}", extra={"extra_fields": {
            "operation": operation_name,
            "status": "failed",
            "duration": duration,
            "error_type": type(e).__name__,
            "error_message": str(e),
            **extra_fields,
        }}, exc_info=True)
        raise
    duration = time.time() - start_time
    logger.info(f"Completed operation: {operation_name} in {duration:.3f}s", extra={"extra_fields": {
        "operation": operation_name,
        "status": "completed",
        "duration": duration,
        **extra_fields,
    }})


class ObservabilityHooks:
    """Callbacks fired on document events such as edits and saves."""

    def __init__(self):
        self.hooks: Dict[str, List[Callable[..., Any]]] = {}
        self.logger = std_logging.getLogger(f"{LOGGER_NAME}.observability")

    def register_hook(self, event_type: str, callback: Callable[..., Any]) -> None:
        self.hooks.setdefault(event_type, []).append(callback)
        self.logger.debug(f"Registered hook for event: {event_type}")

    def unregister_hook(self, event_type: str, callback: Callable[..., Any]) -> None:
        callbacks = self.hooks.get(event_type, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def trigger_hooks(self, event_type: str, **data) -> None:
        """Call every hook for ``event_type``; a failing hook is logged and skipped."""
        for hook in list(self.hooks.get(event_type, [])):
            try:
                hook(**data)
            except Exception as e:
                self.logger.error(f"Hook failed for event {event_type}: {e}")

    def log_document_event(self, event_type: str, title: Optional[str] = None, **data) -> None:
        """Log a document event and fire its hooks."""
        event_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "title": title,
            **data,
        }
        self.logger.info(
            f"Document event: {event_type}",
            extra={"extra_fields": {"event_type": event_type, **event_data}},
        )
        self.trigger_hooks(event_type, **event_data)


observability_hooks = ObservabilityHooks()


def log_error_with_context(error: Exception, context: Dict[str, Any], **extra_fields) -> None:
    """Log ``error`` together with the operation context it happened in."""
    logger = std_logging.getLogger(f"{LOGGER_NAME}.errors")
    error_data = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "error_type": type(error).__name__,
        "error_message": str(error),
        "context": context,
        **extra_fields,
    }
    logger.error(
        f"Error in {context.get('operation', 'unknown operation')}: {error}",
        extra={"extra_fields": error_data},
        exc_info=True,
    )
