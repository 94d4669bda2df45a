from __future__ import annotations

from collections.abc import Iterable

from yieldsync.domain.entities.pool import PoolRecord


def find_by_pid(collection: Iterable[PoolRecord], pid: int) -> PoolRecord | None:
    for record in collection:
        if record.pid == pid:
            return record
    return None


def find_by_symbol(collection: Iterable[PoolRecord], symbol: str) -> PoolRecord | None:
    for record in collection:
        if record.lp_symbol == symbol:
            return record
    return None
