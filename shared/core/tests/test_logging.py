"""Tests for JSON logging sinks and loggers."""

from __future__ import annotations

import io
import json
import logging

from core.logging import MemorySink, PrintSink, sink_logger


def test_sink_logger_writes_json_with_extra() -> None:
    sink = MemorySink()
    logger = sink_logger("core_test.extra", sink)
    logger.info("Producer created", extra={"broker_id": 7})
    (record,) = sink.records()
    assert record["message"] == "Producer created"
    assert record["level"] == "INFO"
    assert record["component"] == "core_test.extra"
    assert record["broker_id"] == 7


def test_sink_logger_does_not_propagate() -> None:
    logger = sink_logger("core_test.isolated", MemorySink())
    assert logger.propagate is False


def test_sink_logger_swaps_sink_on_repeat() -> None:
    first, second = MemorySink(), MemorySink()
    sink_logger("core_test.swap", first)
    logger = sink_logger("core_test.swap", second)
    logger.warning("hello")
    assert first.lines == []
    assert len(second.lines) == 1


def test_exception_info_is_formatted() -> None:
    sink = MemorySink()
    logger = sink_logger("core_test.exc", sink)
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        logger.exception("Failed")
    (record,) = sink.records()
    assert record["level"] == "ERROR"
    assert "RuntimeError: boom" in record["exc_info"]


def test_level_filtering() -> None:
    sink = MemorySink()
    logger = sink_logger("core_test.level", sink, level=logging.INFO)
    logger.debug("hidden")
    logger.info("shown")
    assert [r["message"] for r in sink.records()] == ["shown"]


def test_print_sink_writes_line() -> None:
    stream = io.StringIO()
    PrintSink(stream).write(json.dumps({"a": 1}))
    assert stream.getvalue() == '{"a": 1}\n'
