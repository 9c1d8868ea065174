"""Producer pool: per-broker producer handles and request routing."""

from producer_pool.brokers import load_brokers, parse_broker_list
from producer_pool.config import (
    AsyncProducerConfig,
    DeliveryMode,
    ProducerConfig,
    SyncProducerConfig,
)
from producer_pool.errors import InvalidBrokerError, InvalidConfigError, ProducerPoolError
from producer_pool.grouping import group_by_broker
from producer_pool.metrics import PoolMetrics
from producer_pool.models import Broker, BrokerPartition, PoolData
from producer_pool.pool import ProducerFactory, ProducerPool

__all__ = [
    "AsyncProducerConfig",
    "Broker",
    "BrokerPartition",
    "DeliveryMode",
    "InvalidBrokerError",
    "InvalidConfigError",
    "PoolData",
    "PoolMetrics",
    "ProducerConfig",
    "ProducerFactory",
    "ProducerPool",
    "ProducerPoolError",
    "SyncProducerConfig",
    "group_by_broker",
    "load_brokers",
    "parse_broker_list",
]
