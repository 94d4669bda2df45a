from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import replace
from decimal import Decimal
import logging
from types import MappingProxyType

from yieldsync.application.selectors import SnapshotSelectors
from yieldsync.domain.entities.pool import PoolKind, PoolRecord, UserPosition
from yieldsync.domain.entities.snapshot import BlockState, StoreSnapshot
from yieldsync.domain.services.cross_rate import PivotChains
from yieldsync.domain.services.price_feed import PriceOverride, normalize_symbol


logger = logging.getLogger(__name__)

_COLLECTION_FIELDS = {
    PoolKind.FARM: "farms",
    PoolKind.POOL: "pools",
    PoolKind.MAXIMUS: "maximus",
}


def _merge_public(
    current: tuple[PoolRecord, ...],
    incoming: Iterable[PoolRecord],
) -> tuple[PoolRecord, ...]:
    user_data_by_pid = {record.pid: record.user_data for record in current}
    return tuple(
        replace(record, user_data=user_data_by_pid.get(record.pid))
        for record in incoming
    )


def _merge_user(
    current: tuple[PoolRecord, ...],
    positions: Mapping[int, UserPosition],
) -> tuple[PoolRecord, ...]:
    return tuple(
        replace(record, user_data=positions[record.pid]) if record.pid in positions else record
        for record in current
    )


def _drop_user(current: tuple[PoolRecord, ...]) -> tuple[PoolRecord, ...]:
    return tuple(replace(record, user_data=None) if record.user_data is not None else record for record in current)


class Store:
    """Holds the single current snapshot.

    Fetch-completion handlers are the only callers of the ``commit_*`` methods;
    every commit swaps in a new immutable snapshot with a bumped version.
    """

    def __init__(
        self,
        *,
        chains: PivotChains,
        override: PriceOverride | None = None,
        initial: StoreSnapshot | None = None,
    ):
        self._chains = chains
        self._override = override
        self._snapshot = initial or StoreSnapshot()

    @property
    def snapshot(self) -> StoreSnapshot:
        return self._snapshot

    @property
    def account(self) -> str | None:
        return self._snapshot.account

    def selectors(self) -> SnapshotSelectors:
        return SnapshotSelectors(self._snapshot, chains=self._chains, override=self._override)

    def _commit(self, **changes) -> StoreSnapshot:
        self._snapshot = replace(self._snapshot, version=self._snapshot.version + 1, **changes)
        return self._snapshot

    def commit_public_data(self, kind: PoolKind, records: Iterable[PoolRecord]) -> StoreSnapshot:
        field_name = _COLLECTION_FIELDS[kind]
        merged = _merge_public(getattr(self._snapshot, field_name), records)
        logger.debug("store: commit_public_data kind=%s records=%s", kind.value, len(merged))
        return self._commit(**{field_name: merged})

    def commit_user_data(
        self,
        kind: PoolKind,
        *,
        account: str,
        positions: Mapping[int, UserPosition],
    ) -> StoreSnapshot | None:
        if account != self._snapshot.account:
            logger.info(
                "store: drop_stale_user_data kind=%s fetched_for=%s connected=%s",
                kind.value,
                account,
                self._snapshot.account,
            )
            return None
        field_name = _COLLECTION_FIELDS[kind]
        merged = _merge_user(getattr(self._snapshot, field_name), positions)
        return self._commit(**{field_name: merged})

    def commit_prices(self, prices: Mapping[str, Decimal]) -> StoreSnapshot:
        normalized = {normalize_symbol(symbol): price for symbol, price in prices.items()}
        return self._commit(prices=MappingProxyType(normalized))

    def commit_block(self, block_number: int) -> StoreSnapshot | None:
        block = self._snapshot.block
        if block_number <= block.current_block:
            return None
        initial = block.initial_block or block_number
        return self._commit(block=BlockState(current_block=block_number, initial_block=initial))

    def set_account(self, account: str | None) -> StoreSnapshot:
        if account == self._snapshot.account:
            return self._snapshot
        logger.info("store: account_changed previous=%s current=%s", self._snapshot.account, account)
        return self._commit(
            account=account,
            farms=_drop_user(self._snapshot.farms),
            pools=_drop_user(self._snapshot.pools),
            maximus=_drop_user(self._snapshot.maximus),
        )
