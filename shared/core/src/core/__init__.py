"""Core package: producer contracts, message envelope, encoders and logging."""

from core.kafka import AsyncProducer, Message, ProducerRequest, SyncProducer
from core.logging import (
    LogSink,
    MemorySink,
    PrintSink,
    configure_logging,
    get_logger,
    sink_logger,
)
from core.serializer import (
    DefaultEncoder,
    Encoder,
    JsonEncoder,
    StringEncoder,
    load_encoder,
)

__all__ = [
    "AsyncProducer",
    "Message",
    "ProducerRequest",
    "SyncProducer",
    "Encoder",
    "DefaultEncoder",
    "JsonEncoder",
    "StringEncoder",
    "load_encoder",
    "LogSink",
    "MemorySink",
    "PrintSink",
    "configure_logging",
    "get_logger",
    "sink_logger",
]
