"""Structured logging helpers with run and operation correlation context."""

from __future__ import annotations

import contextvars
import logging
import os
import uuid
from contextlib import contextmanager
from typing import Iterator, Optional

_RUN_ID_VAR: contextvars.ContextVar[str] = contextvars.ContextVar(
    "run_id", default="-"
)
_OPERATION_VAR: contextvars.ContextVar[str] = contextvars.ContextVar(
    "operation", default="-"
)

_LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | run_id=%(run_id)s | op=%(operation)s | "
    "%(name)s | %(message)s"
)


class _RunContextFilter(logging.Filter):
    """Inject run correlation fields into all log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = _RUN_ID_VAR.get("-")
        record.operation = _OPERATION_VAR.get("-")
        return True


def _ensure_filter_on_root_handlers() -> None:
    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        has_filter = any(isinstance(f, _RunContextFilter) for f in handler.filters)
        if not has_filter:
            handler.addFilter(_RunContextFilter())


def configure_structured_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
) -> None:
    """Configure root logging with run/operation context and an optional file sink."""
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=level, format=_LOG_FORMAT)
    else:
        root_logger.setLevel(level)
        formatter = logging.Formatter(_LOG_FORMAT)
        for handler in root_logger.handlers:
            handler.setFormatter(formatter)

    if log_file is not None:
        already_attached = any(
            isinstance(h, logging.FileHandler) and h.baseFilename == os.path.abspath(log_file)
            for h in root_logger.handlers
        )
        if not already_attached:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setFormatter(logging.Formatter(_LOG_FORMAT))
            root_logger.addHandler(file_handler)
    _ensure_filter_on_root_handlers()


def set_run_id(run_id: str | None = None) -> str:
    """Set or generate run correlation ID."""
    value = run_id or str(uuid.uuid4())
    _RUN_ID_VAR.set(value)
    return value


def get_run_id() -> str:
    """Get current run correlation ID."""
    return _RUN_ID_VAR.get("-")


def get_operation() -> str:
    """Get the operation currently tagged on log records."""
    return _OPERATION_VAR.get("-")


@contextmanager
def operation_scope(operation: str) -> Iterator[None]:
    """Tag logs emitted inside the block with ``operation``."""
    token = _OPERATION_VAR.set(operation)
    try:
        yield
    finally:
        _OPERATION_VAR.reset(token)
