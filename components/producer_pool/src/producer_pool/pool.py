"""Producer pool: one producer per broker, requests routed by destination broker."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from types import TracebackType
from typing import Any, Generic, Protocol, TypeVar

from core import get_logger
from core.kafka import AsyncProducer, SyncProducer
from core.serializer import Encoder, load_encoder

from producer_pool.brokers import load_brokers, parse_broker_list
from producer_pool.config import (
    AsyncProducerConfig,
    DeliveryMode,
    ProducerConfig,
    SyncProducerConfig,
)
from producer_pool.dispatch import AsyncDispatcher, Dispatcher, SyncDispatcher
from producer_pool.grouping import group_by_broker
from producer_pool.metrics import PoolMetrics
from producer_pool.models import Broker, BrokerPartition, PoolData
from producer_pool.registry import Closeable, ProducerRegistry

COMPONENT = "producer_pool"

V = TypeVar("V")


class ProducerFactory(Protocol):
    """Builds producer handles. May open a network connection; errors propagate."""

    def create_sync_producer(self, config: SyncProducerConfig) -> SyncProducer: ...

    def create_async_producer(self, config: AsyncProducerConfig) -> AsyncProducer[Any]: ...


class ProducerPool(Generic[V]):
    """
    Keeps one producer per broker and routes pool requests to them.

    The delivery mode comes from ``config.producer_type`` and is fixed for the
    lifetime of the pool. In sync mode all requests for one broker in a
    ``send`` call go out in a single round trip; in async mode each payload
    is handed to the broker's buffered producer.

    Requests addressed to a broker with no registered producer are dropped
    silently (logged at DEBUG and counted in ``groups_dropped_total``).

    ``add_producer`` and ``send`` are safe to call from several threads.
    ``close`` is not safe to call while sends are in flight.
    """

    def __init__(
        self,
        config: ProducerConfig,
        encoder: Encoder[V],
        producer_factory: ProducerFactory,
        *,
        logger: logging.Logger | None = None,
        metrics: PoolMetrics | None = None,
    ) -> None:
        self._mode = DeliveryMode.from_producer_type(config.producer_type)
        self._config = config
        self._factory = producer_factory
        self._logger = logger if logger is not None else get_logger(COMPONENT)
        self._metrics = metrics if metrics is not None else PoolMetrics()

        self._registry: ProducerRegistry[Any]
        self._dispatcher: Dispatcher[Any]
        match self._mode:
            case DeliveryMode.SYNC:
                sync_registry: ProducerRegistry[SyncProducer] = ProducerRegistry(self._logger)
                self._registry = sync_registry
                self._dispatcher = SyncDispatcher(
                    sync_registry, encoder, self._logger, self._metrics
                )
            case DeliveryMode.ASYNC:
                async_registry: ProducerRegistry[AsyncProducer[Any]] = ProducerRegistry(
                    self._logger
                )
                self._registry = async_registry
                self._dispatcher = AsyncDispatcher(async_registry, self._logger, self._metrics)
        self._metrics.producers_registered.labels(mode=self._mode.value).set_function(
            lambda: len(self._registry)
        )

    @classmethod
    def from_config(
        cls,
        config: ProducerConfig,
        producer_factory: ProducerFactory,
        *,
        encoder: Encoder[V] | None = None,
        logger: logging.Logger | None = None,
        metrics: PoolMetrics | None = None,
    ) -> ProducerPool[V]:
        """
        Build a pool entirely from settings.

        Without an explicit ``encoder`` the one named by
        ``config.serializer_class`` is loaded. A producer is added for every
        broker in ``config.broker_file`` and then ``config.broker_list``.
        """
        if encoder is None:
            encoder = load_encoder(config.serializer_class)
        pool: ProducerPool[V] = cls(
            config, encoder, producer_factory, logger=logger, metrics=metrics
        )
        if config.broker_file is not None:
            pool.add_producers(load_brokers(config.broker_file))
        if config.broker_list:
            pool.add_producers(parse_broker_list(config.broker_list))
        return pool

    @property
    def mode(self) -> DeliveryMode:
        return self._mode

    @property
    def metrics(self) -> PoolMetrics:
        return self._metrics

    def broker_ids(self) -> list[int]:
        """Ids of brokers that currently have a producer."""
        return self._registry.broker_ids()

    def get_producer(self, broker_id: int) -> Any | None:
        """The producer registered for ``broker_id``, or None."""
        return self._registry.get(broker_id)

    def add_producer(self, broker: Broker) -> None:
        """
        Create a producer for ``broker`` and register it, replacing any
        producer already registered for the same broker id. The replaced
        producer stays open, since a send may still be using it, and is
        closed by :meth:`close`.

        Errors from the producer factory propagate and leave the registry
        unchanged.
        """
        producer = self._create_producer(broker)
        self._logger.info(
            "Creating %s producer for broker id = %d at %s",
            self._mode.value,
            broker.id,
            broker.address,
            extra={"broker_id": broker.id},
        )
        self._registry.put(broker.id, producer)
        self._metrics.producers_created_total.labels(mode=self._mode.value).inc()

    def add_producers(self, brokers: Iterable[Broker]) -> None:
        for broker in brokers:
            self.add_producer(broker)

    def send(self, *pool_data: PoolData[V]) -> None:
        """
        Deliver the given requests, grouped per destination broker.

        Delivery errors are raised to the caller after every broker group
        has been attempted; see :class:`producer_pool.dispatch.Dispatcher`.
        """
        if not pool_data:
            return
        self._dispatcher.dispatch(group_by_broker(pool_data))

    def close(self) -> None:
        """
        Close every producer of the active mode, including ones replaced by
        a later ``add_producer``. Close failures are logged, not raised.
        """
        self._logger.info("Closing all %s producers", self._mode.value)
        failed = self._registry.close_all()
        if failed:
            self._metrics.close_errors_total.labels(mode=self._mode.value).inc(len(failed))

    @staticmethod
    def get_producer_pool_data(
        topic: str, bid_pid: BrokerPartition, data: Iterable[V]
    ) -> PoolData[V]:
        """
        Package payloads for one topic partition into a pool request.

        No side effects. Raises pydantic ``ValidationError`` for an empty
        topic name.
        """
        return PoolData(topic=topic, bid_pid=bid_pid, data=tuple(data))

    def __enter__(self) -> ProducerPool[V]:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _create_producer(self, broker: Broker) -> Closeable:
        match self._mode:
            case DeliveryMode.SYNC:
                return self._factory.create_sync_producer(
                    SyncProducerConfig.for_broker(broker, self._config)
                )
            case DeliveryMode.ASYNC:
                return self._factory.create_async_producer(
                    AsyncProducerConfig.for_broker(broker, self._config)
                )
