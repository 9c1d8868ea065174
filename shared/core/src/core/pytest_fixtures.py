"""Shared pytest fixtures: in-memory log sink and recording producer fakes."""

from __future__ import annotations

import logging
import threading
import uuid
from collections.abc import Sequence
from typing import Any

import pytest

from core.kafka import Message, ProducerRequest
from core.logging import MemorySink, sink_logger


class RecordingSyncProducer:
    """SyncProducer fake that records every call. Set ``fail_with`` to make sends raise."""

    def __init__(self, config: Any) -> None:
        self.config = config
        self.sends: list[tuple[str, int, tuple[Message, ...]]] = []
        self.multi_sends: list[list[ProducerRequest]] = []
        self.close_calls = 0
        self.fail_with: Exception | None = None
        self.fail_on_close: Exception | None = None

    def send(self, topic: str, partition: int, messages: Sequence[Message]) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.sends.append((topic, partition, tuple(messages)))

    def multi_send(self, requests: Sequence[ProducerRequest]) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.multi_sends.append(list(requests))

    def close(self) -> None:
        self.close_calls += 1
        if self.fail_on_close is not None:
            raise self.fail_on_close

    @property
    def call_count(self) -> int:
        return len(self.sends) + len(self.multi_sends)


class RecordingAsyncProducer:
    """AsyncProducer fake that records every enqueued payload."""

    def __init__(self, config: Any) -> None:
        self.config = config
        self.queued: list[tuple[str, Any, int]] = []
        self.close_calls = 0
        self.fail_with: Exception | None = None
        self.fail_on_close: Exception | None = None

    def send(self, topic: str, data: Any, partition: int) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.queued.append((topic, data, partition))

    def close(self) -> None:
        self.close_calls += 1
        if self.fail_on_close is not None:
            raise self.fail_on_close

    @property
    def call_count(self) -> int:
        return len(self.queued)


class RecordingProducerFactory:
    """
    Builds recording producers and remembers them in creation order.

    Hosts listed in ``unreachable_hosts`` make creation raise ConnectionError.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.created: list[RecordingSyncProducer | RecordingAsyncProducer] = []
        self.unreachable_hosts: set[str] = set()

    def create_sync_producer(self, config: Any) -> RecordingSyncProducer:
        self._check(config)
        producer = RecordingSyncProducer(config)
        with self._lock:
            self.created.append(producer)
        return producer

    def create_async_producer(self, config: Any) -> RecordingAsyncProducer:
        self._check(config)
        producer = RecordingAsyncProducer(config)
        with self._lock:
            self.created.append(producer)
        return producer

    def _check(self, config: Any) -> None:
        if config.host in self.unreachable_hosts:
            raise ConnectionError(f"Connection refused: {config.host}:{config.port}")


@pytest.fixture
def memory_sink() -> MemorySink:
    return MemorySink()


@pytest.fixture
def json_logger(memory_sink: MemorySink) -> logging.Logger:
    """Isolated JSON logger writing to ``memory_sink``; unique name per test."""
    return sink_logger(f"test.{uuid.uuid4().hex}", memory_sink)


@pytest.fixture
def producer_factory() -> RecordingProducerFactory:
    return RecordingProducerFactory()
