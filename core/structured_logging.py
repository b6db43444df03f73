"""Structured logging with run, phase and source file context.

Every record that reaches a root handler carries ``run_id``, ``phase`` and
``source`` attributes, so a logged warning can be traced back to the run
and to the file that was being parsed when it was emitted.
"""

from __future__ import annotations

import contextvars
import logging
import uuid
from contextlib import contextmanager
from typing import Dict, Iterator

UNSET = "-"

_CONTEXT: Dict[str, contextvars.ContextVar[str]] = {
    name: contextvars.ContextVar(name, default=UNSET)
    for name in ("run_id", "phase", "source")
}

LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | run_id=%(run_id)s | phase=%(phase)s | "
    "source=%(source)s | %(name)s | %(message)s"
)


class _RunContextFilter(logging.Filter):
    """Copy the current context values onto every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        for name, var in _CONTEXT.items():
            setattr(record, name, var.get())
        return True


def _install(handler: logging.Handler, formatter: logging.Formatter) -> None:
    handler.setFormatter(formatter)
    if not any(isinstance(f, _RunContextFilter) for f in handler.filters):
        handler.addFilter(_RunContextFilter())


def configure_structured_logging(level: int = logging.INFO) -> None:
    """Configure the root logger to emit context-enriched records.

    Existing root handlers are reformatted in place; without any, a stderr
    stream handler is added.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    if not root_logger.handlers:
        root_logger.addHandler(logging.StreamHandler())
    formatter = logging.Formatter(LOG_FORMAT)
    for handler in root_logger.handlers:
        _install(handler, formatter)


def set_run_id(run_id: str | None = None) -> str:
    """Set or generate the run correlation ID."""
    value = run_id or str(uuid.uuid4())
    _CONTEXT["run_id"].set(value)
    return value


def get_run_id() -> str:
    return _CONTEXT["run_id"].get()


@contextmanager
def _context_scope(name: str, value: str) -> Iterator[None]:
    token = _CONTEXT[name].set(value)
    try:
        yield
    finally:
        _CONTEXT[name].reset(token)


def phase_scope(phase: str):
    """Temporarily set the pipeline phase (``parse``, ``export``)."""
    return _context_scope("phase", phase)


def source_scope(source: str):
    """Temporarily set the source file reported in emitted logs."""
    return _context_scope("source", source)
