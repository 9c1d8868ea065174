"""Data models: brokers, partition references and pool request units."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

V = TypeVar("V")


class Broker(BaseModel):
    """A broker as handed to the pool. Immutable; the pool only reads it."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0, description="Broker id")
    host: str = Field(min_length=1)
    port: int = Field(gt=0, le=65535)

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"


class BrokerPartition(BaseModel):
    """Destination of a request: partition ``partition_id`` on broker ``broker_id``."""

    model_config = ConfigDict(frozen=True)

    broker_id: int = Field(ge=0)
    partition_id: int = Field(ge=0)


class PoolData(BaseModel, Generic[V]):
    """Payloads for one (topic, broker, partition), delivered together by one ``send``."""

    model_config = ConfigDict(frozen=True)

    topic: str = Field(min_length=1)
    bid_pid: BrokerPartition
    data: tuple[V, ...] = Field(default=())

    @property
    def broker_id(self) -> int:
        return self.bid_pid.broker_id

    @property
    def partition_id(self) -> int:
        return self.bid_pid.partition_id
