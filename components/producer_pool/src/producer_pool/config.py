"""Producer pool configuration (Pydantic Settings) and per-mode handle configs."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from producer_pool.errors import InvalidConfigError
from producer_pool.models import Broker


class DeliveryMode(str, Enum):
    SYNC = "sync"
    ASYNC = "async"

    @classmethod
    def from_producer_type(cls, value: str) -> DeliveryMode:
        """Resolve a ``producer_type`` setting. Only the exact literals are accepted."""
        try:
            return cls(value)
        except ValueError:
            raise InvalidConfigError(
                f"Valid values for producer_type are sync/async, got {value!r}"
            ) from None


class ProducerConfig(BaseSettings):
    """Environment-driven pool settings."""

    model_config = SettingsConfigDict(
        env_prefix="PRODUCER_POOL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Validated by the pool, so a bad value fails pool construction.
    producer_type: str = Field(default="sync", description="sync | async")

    # Sync producers
    buffer_size: int = Field(default=100 * 1024, gt=0, description="Socket buffer size in bytes")
    connect_timeout_ms: int = Field(default=5000, gt=0)
    reconnect_interval_ms: int = Field(
        default=30000, gt=0, description="Requests between forced reconnects"
    )

    # Async producers
    serializer_class: str = Field(
        default="core.serializer.DefaultEncoder",
        description="Dotted path of the payload encoder (pool default, async producer descriptor)",
    )

    # Static brokers: "id:host:port,id:host:port" and/or a YAML broker file
    broker_list: str | None = Field(default=None)
    broker_file: Path | None = Field(default=None)


class SyncProducerConfig(BaseModel):
    """Everything a blocking producer needs to connect to one broker."""

    model_config = ConfigDict(frozen=True)

    host: str
    port: int
    buffer_size: int
    connect_timeout_ms: int
    reconnect_interval_ms: int

    @classmethod
    def for_broker(cls, broker: Broker, config: ProducerConfig) -> SyncProducerConfig:
        return cls(
            host=broker.host,
            port=broker.port,
            buffer_size=config.buffer_size,
            connect_timeout_ms=config.connect_timeout_ms,
            reconnect_interval_ms=config.reconnect_interval_ms,
        )


class AsyncProducerConfig(BaseModel):
    """Everything a buffered producer needs to connect to one broker."""

    model_config = ConfigDict(frozen=True)

    host: str
    port: int
    serializer_class: str

    @classmethod
    def for_broker(cls, broker: Broker, config: ProducerConfig) -> AsyncProducerConfig:
        return cls(
            host=broker.host,
            port=broker.port,
            serializer_class=config.serializer_class,
        )
