from __future__ import annotations

from typing import Protocol

from yieldsync.domain.entities.pool import PoolKind, PoolRecord, UserPosition


class PoolDataPort(Protocol):
    async def fetch_public_data(self, kind: PoolKind) -> list[PoolRecord]:
        ...

    async def fetch_user_data(self, kind: PoolKind, *, account: str) -> dict[int, UserPosition]:
        ...
