"""Pluggable structured logging on top of the standard library ``logging`` interface.

Components use :func:`get_logger` to get a standard :class:`logging.Logger`
that writes JSON lines to stdout. Libraries that must not touch global
logging state accept a logger instead; :func:`sink_logger` builds one that
writes to a single :class:`LogSink` and nowhere else.
"""

from __future__ import annotations

import json
import logging
import sys
import threading
from typing import Any, Protocol, TextIO, override

# Attributes that exist on every logging.LogRecord; we don't duplicate them as "extra".
_STANDARD_RECORD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "message",
        "taskName",
        "thread",
        "threadName",
    }
)


class LogSink(Protocol):
    """Abstract destination for formatted log lines (stdout, file, backend)."""

    def write(self, message: str) -> None:  # pragma: no cover
        ...


class PrintSink:
    """Log sink that writes each record as a line via :func:`print`."""

    _stream: TextIO

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout

    def write(self, message: str) -> None:
        print(message, file=self._stream, flush=True)


class MemorySink:
    """Keeps every line in memory. Thread-safe; handy for tests and debugging."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._lines: list[str] = []

    def write(self, message: str) -> None:
        with self._lock:
            self._lines.append(message)

    @property
    def lines(self) -> list[str]:
        with self._lock:
            return list(self._lines)

    def records(self) -> list[dict[str, Any]]:
        """Decoded JSON records, oldest first."""
        return [json.loads(line) for line in self.lines]


class JsonFormatter(logging.Formatter):
    """Format log records as a single JSON object per line."""

    @override
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": record.created,
            "level": record.levelname,
            "component": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _STANDARD_RECORD_ATTRS and value is not None:
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class SinkHandler(logging.Handler):
    """Handler that writes formatted records to a :class:`LogSink`."""

    _sink: LogSink

    def __init__(self, sink: LogSink) -> None:
        super().__init__()
        self._sink = sink
        self.setFormatter(JsonFormatter())

    @override
    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._sink.write(self.format(record))
        except Exception:  # noqa: BLE001
            self.handleError(record)


_root_handler: SinkHandler | None = None


def configure_logging(
    level: int = logging.INFO,
    sink: LogSink | None = None,
) -> None:
    """Configure root logging to emit JSON lines to the given sink.

    If ``sink`` is omitted, uses :class:`PrintSink` (stdout). Calling again
    replaces the previously installed handler rather than stacking another.
    """
    global _root_handler
    root = logging.getLogger()
    if _root_handler is not None:
        root.removeHandler(_root_handler)
    _root_handler = SinkHandler(sink if sink is not None else PrintSink())
    root.setLevel(level)
    root.addHandler(_root_handler)


def get_logger(name: str) -> logging.Logger:
    """Return a standard :class:`logging.Logger` for the given component/name.

    On first call, configures root logging to emit JSON lines to stdout (or
    the sink set by :func:`configure_logging`). Use the standard interface::

        logger = get_logger(__name__)
        logger.info("Producer created", extra={"broker_id": 1})
    """
    if _root_handler is None:
        configure_logging()
    return logging.getLogger(name)


def sink_logger(
    name: str,
    sink: LogSink,
    level: int = logging.DEBUG,
) -> logging.Logger:
    """Return a logger that writes JSON lines only to ``sink``.

    The logger does not propagate to the root logger, so nothing global is
    configured. Repeated calls with the same name swap the sink.
    """
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        if isinstance(handler, SinkHandler):
            logger.removeHandler(handler)
    logger.addHandler(SinkHandler(sink))
    logger.setLevel(level)
    logger.propagate = False
    return logger
