"""Logging configuration for MCP Jira.

Logs always go to stderr; stdout carries the MCP stdio protocol.
"""

import logging
import os
import sys
import threading
import time
import types
import uuid
from collections.abc import Mapping
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, cast

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] [%(context)s] %(message)s"
DEFAULT_LOG_LEVEL = "INFO"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB
LOG_BACKUP_COUNT = 5


# Operation context of the current thread, shared by every logger
_context_data = threading.local()


def _get_context_str() -> str:
    context_data = getattr(_context_data, "data", {})
    if not context_data:
        return "no-context"
    # operation=X,trace_id=Y,...
    return ",".join(f"{k}={v}" for k, v in context_data.items())


class ContextualLogger(logging.Logger):
    """Logger that tags records with the operation they belong to."""

    def _log(
        self,
        level: int,
        msg: object,
        args: tuple[object, ...] | Mapping[str, object],
        exc_info: Any = None,
        extra: Mapping[str, object] | None = None,
        stack_info: bool = False,
        stacklevel: int = 1,
    ) -> None:
        extra = dict(extra or {})
        extra.setdefault("context", _get_context_str())
        super()._log(level, msg, args, exc_info, extra, stack_info, stacklevel + 1)

    def get_context(self) -> dict[str, Any]:
        return dict(getattr(_context_data, "data", {}))

    def set_context(self, **kwargs: Any) -> None:
        """Add key-value pairs to the context of the current thread."""
        if not hasattr(_context_data, "data"):
            _context_data.data = {}
        _context_data.data.update(kwargs)

    def replace_context(self, context: dict[str, Any]) -> None:
        _context_data.data = dict(context)

    def clear_context(self) -> None:
        _context_data.data = {}


class _DefaultContextFilter(logging.Filter):
    """Fill in ``context`` for records coming from plain loggers."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "context"):
            record.context = _get_context_str()
        return True


class LoggingContextManager:
    """Context manager that logs the start, end and duration of an operation."""

    def __init__(self, logger: logging.Logger, operation: str, **context: Any) -> None:
        """
        Initialize the logging context manager.

        Args:
            logger: Logger to report to; context is only attached when it
                is a ContextualLogger
            operation: Name of the operation being executed
            **context: Additional context data
        """
        self.logger = logger
        self.operation = operation
        self.context = {k: v for k, v in context.items() if k != "trace_id"}
        self.trace_id = context.get("trace_id", str(uuid.uuid4())[:8])
        self.start_time = time.time()
        self.old_context: dict[str, Any] = {}

    def __enter__(self) -> "LoggingContextManager":
        self.start_time = time.time()
        if isinstance(self.logger, ContextualLogger):
            self.old_context = self.logger.get_context()
            self.logger.set_context(
                **self.context, operation=self.operation, trace_id=self.trace_id
            )
        self.logger.info(f"Operation started: {self.operation}")
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        duration = time.time() - self.start_time
        if exc_type:
            self.logger.error(
                f"Operation failed: {self.operation} after {duration:.3f}s - {exc_val}"
            )
        else:
            self.logger.debug(
                f"Operation completed: {self.operation} in {duration:.3f}s"
            )
        if isinstance(self.logger, ContextualLogger):
            self.logger.replace_context(self.old_context)


def get_logger(name: str) -> ContextualLogger:
    """Return the contextual logger registered under ``name``."""
    logging.setLoggerClass(ContextualLogger)
    return cast(ContextualLogger, logging.getLogger(name))


def setup_logger(
    name: str = "mcp-jira",
    level: str | None = None,
    log_dir: str | None = None,
    log_format: str | None = None,
) -> ContextualLogger:
    """
    Configure and return the contextual logger for ``name``.

    Child loggers such as ``mcp-jira.operations`` propagate to it, so
    configuring the root ``mcp-jira`` logger once is enough.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, etc.); falls back to LOG_LEVEL
        log_dir: Directory for a rotating log file; falls back to LOG_DIR.
            No file is written when neither is set.
        log_format: Log format; falls back to LOG_FORMAT

    Returns:
        Configured contextual logger
    """
    logger = get_logger(name)

    log_level = level or os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    formatter = logging.Formatter(log_format or os.getenv("LOG_FORMAT", DEFAULT_FORMAT))
    context_filter = _DefaultContextFilter()

    # Reconfiguring replaces the handlers instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(context_filter)
    logger.addHandler(console_handler)

    log_directory = log_dir or os.getenv("LOG_DIR")
    if log_directory:
        Path(log_directory).mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            Path(log_directory) / f"{name}.log",
            maxBytes=MAX_LOG_SIZE,
            backupCount=LOG_BACKUP_COUNT,
        )
        file_handler.setFormatter(formatter)
        file_handler.addFilter(context_filter)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def log_operation(
    logger: logging.Logger, operation: str, **context: Any
) -> LoggingContextManager:
    """
    Create a context manager for operation logging.

    Args:
        logger: Logger to report to
        operation: Name of the operation
        **context: Additional context data

    Returns:
        Context manager configured for operation logging
    """
    return LoggingContextManager(logger, operation, **context)
