"""Payload encoders: turn a typed payload into a wire :class:`Message`."""

from __future__ import annotations

import importlib
import json
from typing import Any, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel

from core.kafka import Message

V_contra = TypeVar("V_contra", contravariant=True)


@runtime_checkable
class Encoder(Protocol[V_contra]):
    """Converts a payload to a message. Must be pure and must not fail for valid payloads."""

    def encode(self, payload: V_contra) -> Message: ...


class DefaultEncoder:
    """Passes bytes through unchanged."""

    def encode(self, payload: bytes) -> Message:
        return Message(payload=bytes(payload))


class StringEncoder:
    """Encodes text with the given codec (UTF-8 by default)."""

    def __init__(self, codec: str = "utf-8") -> None:
        self._codec = codec

    def encode(self, payload: str) -> Message:
        return Message(payload=payload.encode(self._codec))


class JsonEncoder:
    """Encodes pydantic models with ``model_dump_json``, anything else with :func:`json.dumps`."""

    def encode(self, payload: Any) -> Message:
        if isinstance(payload, BaseModel):
            return Message(payload=payload.model_dump_json().encode("utf-8"))
        return Message(payload=json.dumps(payload, default=str).encode("utf-8"))


def load_encoder(class_path: str) -> Encoder[Any]:
    """
    Instantiate an encoder from a dotted ``module.ClassName`` path.

    Raises ValueError for a path without a module part, ImportError or
    AttributeError when the module or class cannot be found.
    """
    module_name, _, class_name = class_path.rpartition(".")
    if not module_name:
        raise ValueError(f"Encoder path must be 'module.ClassName', got {class_path!r}")
    module = importlib.import_module(module_name)
    encoder_cls = getattr(module, class_name)
    return encoder_cls()
