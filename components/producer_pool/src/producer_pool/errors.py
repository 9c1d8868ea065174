"""Exceptions raised by the producer pool."""

from __future__ import annotations


class ProducerPoolError(Exception):
    """Base class for producer pool errors."""


class InvalidConfigError(ProducerPoolError):
    """Configuration value the pool cannot run with. Raised at construction."""


class InvalidBrokerError(ProducerPoolError):
    """Malformed broker description in a broker list or broker file."""
