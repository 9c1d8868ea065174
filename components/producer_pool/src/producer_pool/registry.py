"""Thread-safe broker id -> producer handle mapping."""

from __future__ import annotations

import logging
import threading
from typing import Generic, Protocol, TypeVar


class Closeable(Protocol):
    def close(self) -> None: ...


H = TypeVar("H", bound=Closeable)


class ProducerRegistry(Generic[H]):
    """
    Owns the producer handles of one delivery mode, at most one per broker id.

    All mapping operations are atomic under a single lock. Handles are built
    by the caller before ``put``, so readers never see one half constructed.
    A handle replaced by ``put`` is retired rather than closed: a send may
    still be using it. Retired handles are closed by ``close_all`` together
    with the live ones.
    """

    def __init__(self, logger: logging.Logger) -> None:
        self._lock = threading.Lock()
        self._producers: dict[int, H] = {}
        self._retired: list[tuple[int, H]] = []
        self._logger = logger

    def put(self, broker_id: int, producer: H) -> H | None:
        """Register ``producer`` for ``broker_id``; return the handle it replaced, if any."""
        with self._lock:
            previous = self._producers.get(broker_id)
            self._producers[broker_id] = producer
            if previous is not None and previous is not producer:
                self._retired.append((broker_id, previous))
        return previous

    def get(self, broker_id: int) -> H | None:
        with self._lock:
            return self._producers.get(broker_id)

    def broker_ids(self) -> list[int]:
        with self._lock:
            return sorted(self._producers)

    def retired_count(self) -> int:
        """Replaced handles waiting to be closed at shutdown."""
        with self._lock:
            return len(self._retired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._producers)

    def __contains__(self, broker_id: object) -> bool:
        with self._lock:
            return broker_id in self._producers

    def close_all(self) -> list[int]:
        """
        Close and forget every registered and retired handle.

        Every handle gets exactly one ``close`` call even if earlier ones
        raise; failures are logged. Returns the broker ids that failed.
        """
        with self._lock:
            producers = self._retired + list(self._producers.items())
            self._producers.clear()
            self._retired = []
        failed: list[int] = []
        for broker_id, producer in producers:
            try:
                producer.close()
            except Exception:
                failed.append(broker_id)
                self._logger.exception(
                    "Failed to close producer",
                    extra={"broker_id": broker_id},
                )
        return failed
