"""Producer handle contracts and the message envelope they carry."""

from __future__ import annotations

import zlib
from collections.abc import Sequence
from typing import Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

V_contra = TypeVar("V_contra", contravariant=True)


class Message(BaseModel):
    """A single wire-level message: opaque payload bytes plus an optional key."""

    model_config = ConfigDict(frozen=True)

    payload: bytes = Field(description="Encoded message body")
    key: bytes | None = Field(default=None)

    @property
    def checksum(self) -> int:
        """CRC32 of the payload, as written into the envelope."""
        return zlib.crc32(self.payload) & 0xFFFFFFFF

    @property
    def size(self) -> int:
        return len(self.payload) + (len(self.key) if self.key else 0)


class ProducerRequest(BaseModel):
    """One produce request: a message set bound for a single topic partition."""

    model_config = ConfigDict(frozen=True)

    topic: str
    partition: int = Field(ge=0)
    messages: tuple[Message, ...] = Field(default=())

    @property
    def size_in_bytes(self) -> int:
        return sum(m.size for m in self.messages)


@runtime_checkable
class SyncProducer(Protocol):
    """Blocking producer: each call is a request/response round trip to one broker."""

    def send(self, topic: str, partition: int, messages: Sequence[Message]) -> None:
        """Send one message set and wait for the broker's acknowledgement."""
        ...

    def multi_send(self, requests: Sequence[ProducerRequest]) -> None:
        """Send several requests to the same broker in a single round trip."""
        ...

    def close(self) -> None:
        """Close the connection and release resources."""
        ...


@runtime_checkable
class AsyncProducer(Protocol[V_contra]):
    """Buffered producer: sends are queued and flushed in the background."""

    def send(self, topic: str, data: V_contra, partition: int) -> None:
        """Enqueue one payload. Returns without waiting for delivery."""
        ...

    def close(self) -> None:
        """Flush what is queued, then close the connection."""
        ...
