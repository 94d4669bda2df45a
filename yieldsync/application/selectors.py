from __future__ import annotations

from decimal import Decimal
from functools import cached_property

from yieldsync.domain.entities.pool import PoolKind, PoolRecord, QuoteToken
from yieldsync.domain.entities.snapshot import BlockState, StoreSnapshot
from yieldsync.domain.entities.valuation import ValuationRecord
from yieldsync.domain.services.cross_rate import PivotChains, quote_prices_usd
from yieldsync.domain.services.decimal_value import ZERO, or_zero
from yieldsync.domain.services.pool_lookup import find_by_pid, find_by_symbol
from yieldsync.domain.services.price_feed import PriceOverride, apply_override, lookup_price
from yieldsync.domain.services.valuation import resolve_quote_token, value_collection, value_position


class SnapshotSelectors:
    """Read-only derived views over one snapshot.

    Derived quote prices are computed once per instance; build a new instance
    for every new snapshot.
    """

    def __init__(
        self,
        snapshot: StoreSnapshot,
        *,
        chains: PivotChains,
        override: PriceOverride | None = None,
    ):
        self._snapshot = snapshot
        self._chains = chains
        self._override = override

    @property
    def snapshot(self) -> StoreSnapshot:
        return self._snapshot

    @cached_property
    def quote_prices(self) -> dict[QuoteToken, Decimal]:
        return quote_prices_usd(self._snapshot.farms, self._chains)

    def get_pool_by_id(self, pid: int, kind: PoolKind = PoolKind.FARM) -> PoolRecord | None:
        return find_by_pid(self._snapshot.collection(kind), pid)

    def get_pool_by_symbol(self, symbol: str, kind: PoolKind = PoolKind.FARM) -> PoolRecord | None:
        return find_by_symbol(self._snapshot.collection(kind), symbol)

    def get_position_valuation(self, pid: int, kind: PoolKind = PoolKind.FARM) -> ValuationRecord:
        return value_position(pid, self.get_pool_by_id(pid, kind), self.quote_prices)

    def get_maximus_valuations(self) -> list[ValuationRecord]:
        return value_collection(self._snapshot.maximus, self.quote_prices)

    def get_api_prices(self) -> dict[str, Decimal] | None:
        return apply_override(self._snapshot.prices, self._override)

    def get_api_price(self, symbol: str) -> Decimal | None:
        return lookup_price(self._snapshot.prices, symbol, self._override)

    def get_derived_usd_price(self, symbol: str) -> Decimal:
        if self._override is not None and self._override.matches(symbol):
            return self._override.price_usd
        token = resolve_quote_token(symbol)
        if token is not None and token in self._chains:
            return self.quote_prices.get(token, ZERO)
        return or_zero(lookup_price(self._snapshot.prices, symbol))

    def get_block(self) -> BlockState:
        return self._snapshot.block

    def get_initial_block(self) -> int:
        return self._snapshot.block.initial_block
