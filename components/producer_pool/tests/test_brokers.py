"""Unit tests for static broker inputs."""

from pathlib import Path

import pytest
from producer_pool.brokers import load_brokers, parse_broker, parse_broker_list
from producer_pool.errors import InvalidBrokerError
from producer_pool.models import Broker


def test_parse_broker() -> None:
    assert parse_broker("3:kafka-3:9092") == Broker(id=3, host="kafka-3", port=9092)


@pytest.mark.parametrize("spec", ["kafka:9092", "x:kafka:9092", "1:kafka:port", "1::9092", "1:h:0"])
def test_parse_broker_rejects_malformed(spec: str) -> None:
    with pytest.raises(InvalidBrokerError):
        parse_broker(spec)


def test_parse_broker_list_skips_empty_entries() -> None:
    brokers = parse_broker_list("0:a:9092, 1:b:9093,,")
    assert [b.id for b in brokers] == [0, 1]
    assert brokers[1].host == "b"


def test_load_brokers_missing_file() -> None:
    assert load_brokers(Path("/nonexistent/brokers.yaml")) == []


def test_load_brokers_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "brokers.yaml"
    path.write_text("")
    assert load_brokers(path) == []


def test_load_brokers_without_list(tmp_path: Path) -> None:
    path = tmp_path / "brokers.yaml"
    path.write_text("brokers: localhost")
    assert load_brokers(path) == []


def test_load_brokers_mappings_and_strings(tmp_path: Path) -> None:
    path = tmp_path / "brokers.yaml"
    path.write_text(
        "brokers:\n"
        "  - {id: 0, host: kafka-0, port: 9092}\n"
        "  - id: 1\n"
        "    host: kafka-1\n"
        "    port: 9093\n"
        "  - '2:kafka-2:9094'\n"
    )
    assert load_brokers(path) == [
        Broker(id=0, host="kafka-0", port=9092),
        Broker(id=1, host="kafka-1", port=9093),
        Broker(id=2, host="kafka-2", port=9094),
    ]


def test_load_brokers_invalid_entry(tmp_path: Path) -> None:
    path = tmp_path / "brokers.yaml"
    path.write_text("brokers:\n  - {id: 0, host: kafka-0}\n")
    with pytest.raises(InvalidBrokerError):
        load_brokers(path)


def test_load_brokers_invalid_yaml(tmp_path: Path) -> None:
    path = tmp_path / "brokers.yaml"
    path.write_text("brokers:\n  - [unclosed\n")
    with pytest.raises(InvalidBrokerError):
        load_brokers(path)
