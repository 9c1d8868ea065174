"""Static broker inputs: ``id:host:port`` lists and YAML broker files."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from producer_pool.errors import InvalidBrokerError
from producer_pool.models import Broker


def parse_broker(spec: str) -> Broker:
    """Parse one ``id:host:port`` entry."""
    parts = spec.strip().split(":")
    if len(parts) != 3:
        raise InvalidBrokerError(f"Broker entry must be 'id:host:port', got {spec!r}")
    broker_id, host, port = parts
    try:
        return Broker(id=int(broker_id), host=host, port=int(port))
    except (ValueError, ValidationError) as e:
        raise InvalidBrokerError(f"Invalid broker entry {spec!r}: {e}") from e


def parse_broker_list(broker_list: str) -> list[Broker]:
    """Parse a comma separated ``id:host:port`` list. Empty entries are ignored."""
    return [parse_broker(s) for s in broker_list.split(",") if s.strip()]


def load_brokers(path: Path) -> list[Broker]:
    """
    Read brokers from a YAML file shaped like::

        brokers:
          - {id: 0, host: localhost, port: 9092}

    A missing file or a file without a ``brokers`` list yields no brokers;
    a malformed entry raises :class:`InvalidBrokerError`.
    """
    if not path.exists():
        return []
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise InvalidBrokerError(f"Cannot parse broker file {path}: {e}") from e
    entries = data.get("brokers") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        return []
    brokers: list[Broker] = []
    for entry in entries:
        if isinstance(entry, str):
            brokers.append(parse_broker(entry))
            continue
        try:
            brokers.append(Broker.model_validate(entry))
        except ValidationError as e:
            raise InvalidBrokerError(f"Invalid broker entry {entry!r}: {e}") from e
    return brokers
