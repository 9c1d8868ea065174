"""Tests for the message envelope and produce request models."""

from __future__ import annotations

import zlib

import pytest
from core.kafka import Message, ProducerRequest
from pydantic import ValidationError


def test_message_checksum_is_crc32_of_payload() -> None:
    msg = Message(payload=b"hello")
    assert msg.checksum == zlib.crc32(b"hello")


def test_message_size_includes_key() -> None:
    assert Message(payload=b"abc").size == 3
    assert Message(payload=b"abc", key=b"k").size == 4


def test_message_is_frozen() -> None:
    msg = Message(payload=b"x")
    with pytest.raises(ValidationError):
        msg.payload = b"y"  # type: ignore[misc]


def test_request_size_in_bytes() -> None:
    req = ProducerRequest(
        topic="t",
        partition=0,
        messages=(Message(payload=b"ab"), Message(payload=b"cde")),
    )
    assert req.size_in_bytes == 5


def test_request_rejects_negative_partition() -> None:
    with pytest.raises(ValidationError):
        ProducerRequest(topic="t", partition=-1)
