"""Producer pool fixtures: brokers, configs and pools wired to recording producers."""

from __future__ import annotations

import logging

import pytest
from core.pytest_fixtures import RecordingProducerFactory
from core.serializer import StringEncoder
from producer_pool.config import ProducerConfig
from producer_pool.metrics import PoolMetrics
from producer_pool.models import Broker
from producer_pool.pool import ProducerPool


@pytest.fixture
def brokers() -> list[Broker]:
    return [
        Broker(id=1, host="broker-1", port=9092),
        Broker(id=2, host="broker-2", port=9093),
    ]


@pytest.fixture
def metrics() -> PoolMetrics:
    return PoolMetrics()


@pytest.fixture
def sync_pool(
    producer_factory: RecordingProducerFactory,
    json_logger: logging.Logger,
    metrics: PoolMetrics,
) -> ProducerPool[str]:
    return ProducerPool(
        ProducerConfig(producer_type="sync"),
        StringEncoder(),
        producer_factory,
        logger=json_logger,
        metrics=metrics,
    )


@pytest.fixture
def async_pool(
    producer_factory: RecordingProducerFactory,
    json_logger: logging.Logger,
    metrics: PoolMetrics,
) -> ProducerPool[str]:
    return ProducerPool(
        ProducerConfig(producer_type="async"),
        StringEncoder(),
        producer_factory,
        logger=json_logger,
        metrics=metrics,
    )
