"""Split a mixed batch of pool requests by destination broker."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from producer_pool.models import PoolData


def group_by_broker(
    requests: Iterable[PoolData[Any]],
) -> list[tuple[int, list[PoolData[Any]]]]:
    """
    Group requests by ``bid_pid.broker_id``.

    Groups come out in the order their broker id first appears, and each
    group keeps the relative order of its requests. Every request lands in
    exactly one group.
    """
    groups: dict[int, list[PoolData[Any]]] = {}
    for request in requests:
        groups.setdefault(request.broker_id, []).append(request)
    return list(groups.items())
