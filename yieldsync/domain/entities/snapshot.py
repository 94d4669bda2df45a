from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Mapping

from yieldsync.domain.entities.pool import PoolKind, PoolRecord


@dataclass(frozen=True)
class BlockState:
    current_block: int = 0
    initial_block: int = 0


@dataclass(frozen=True)
class RefreshClock:
    fast: int = 0
    slow: int = 0
    chain_head: int = 0


@dataclass(frozen=True)
class StoreSnapshot:
    farms: tuple[PoolRecord, ...] = ()
    pools: tuple[PoolRecord, ...] = ()
    maximus: tuple[PoolRecord, ...] = ()
    prices: Mapping[str, Decimal] | None = None
    block: BlockState = field(default_factory=BlockState)
    account: str | None = None
    version: int = 0

    def collection(self, kind: PoolKind) -> tuple[PoolRecord, ...]:
        if kind is PoolKind.FARM:
            return self.farms
        if kind is PoolKind.POOL:
            return self.pools
        return self.maximus
