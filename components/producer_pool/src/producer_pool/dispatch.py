"""Deliver grouped pool requests to the producer registered for each broker."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from core.kafka import AsyncProducer, ProducerRequest, SyncProducer
from core.serializer import Encoder

from producer_pool.config import DeliveryMode
from producer_pool.metrics import PoolMetrics
from producer_pool.models import PoolData
from producer_pool.registry import Closeable, ProducerRegistry

H = TypeVar("H", bound=Closeable)


class Dispatcher(ABC, Generic[H]):
    """
    Walks broker groups, looks up each broker's producer and delivers.

    A group whose broker has no producer is skipped without error. A group
    that raises does not stop later groups; once every group has been tried
    the first failure is re-raised as is.
    """

    mode: DeliveryMode

    def __init__(
        self,
        registry: ProducerRegistry[H],
        logger: logging.Logger,
        metrics: PoolMetrics,
    ) -> None:
        self._registry = registry
        self._logger = logger
        self._metrics = metrics

    def dispatch(self, groups: Sequence[tuple[int, list[PoolData[Any]]]]) -> None:
        errors: list[tuple[int, Exception]] = []
        for broker_id, requests in groups:
            self._logger.debug(
                "Fetching %s producer", self.mode.value, extra={"broker_id": broker_id}
            )
            producer = self._registry.get(broker_id)
            if producer is None:
                self._metrics.groups_dropped_total.labels(mode=self.mode.value).inc()
                self._logger.debug(
                    "No producer for broker, dropping requests",
                    extra={"broker_id": broker_id, "requests": len(requests)},
                )
                continue
            start = time.perf_counter()
            try:
                self._deliver(broker_id, producer, requests)
            except Exception as e:
                errors.append((broker_id, e))
                self._metrics.delivery_errors_total.labels(mode=self.mode.value).inc()
                self._logger.error(
                    "Delivery to broker failed",
                    extra={"broker_id": broker_id, "error": f"{type(e).__name__}: {e}"},
                )
            finally:
                self._metrics.dispatch_duration_seconds.labels(
                    mode=self.mode.value
                ).observe(time.perf_counter() - start)
        if errors:
            _, first = errors[0]
            if len(errors) > 1:
                others = ", ".join(str(bid) for bid, _ in errors[1:])
                note = f"Delivery also failed for broker ids: {others}"
                # A handle may raise the same instance on every call.
                if note not in getattr(first, "__notes__", ()):
                    first.add_note(note)
            raise first

    @abstractmethod
    def _deliver(self, broker_id: int, producer: H, requests: list[PoolData[Any]]) -> None:
        ...


class SyncDispatcher(Dispatcher[SyncProducer]):
    """Encodes payloads and sends one request per pool entry, batched per broker."""

    mode = DeliveryMode.SYNC

    def __init__(
        self,
        registry: ProducerRegistry[SyncProducer],
        encoder: Encoder[Any],
        logger: logging.Logger,
        metrics: PoolMetrics,
    ) -> None:
        super().__init__(registry, logger, metrics)
        self._encoder = encoder

    def _deliver(
        self, broker_id: int, producer: SyncProducer, requests: list[PoolData[Any]]
    ) -> None:
        producer_requests = [
            ProducerRequest(
                topic=req.topic,
                partition=req.partition_id,
                messages=tuple(self._encoder.encode(d) for d in req.data),
            )
            for req in requests
        ]
        if len(producer_requests) > 1:
            producer.multi_send(producer_requests)
            call = "multi_send"
        else:
            only = producer_requests[0]
            producer.send(only.topic, only.partition, only.messages)
            call = "send"
        self._metrics.requests_sent_total.labels(mode=self.mode.value, call=call).inc()
        self._metrics.messages_sent_total.labels(mode=self.mode.value).inc(
            sum(len(r.messages) for r in producer_requests)
        )
        self._logger.info(
            "Sent messages to broker",
            extra={
                "broker_id": broker_id,
                "requests": len(producer_requests),
                "call": call,
            },
        )


class AsyncDispatcher(Dispatcher[AsyncProducer[Any]]):
    """Hands every payload to the broker's buffered producer, one at a time."""

    mode = DeliveryMode.ASYNC

    def _deliver(
        self, broker_id: int, producer: AsyncProducer[Any], requests: list[PoolData[Any]]
    ) -> None:
        for req in requests:
            for d in req.data:
                producer.send(req.topic, d, req.partition_id)
                self._metrics.requests_sent_total.labels(
                    mode=self.mode.value, call="enqueue"
                ).inc()
                self._metrics.messages_sent_total.labels(mode=self.mode.value).inc()
