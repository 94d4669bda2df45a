from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from yieldsync.domain.entities.pool import PoolRecord, QuoteToken
from yieldsync.domain.services.decimal_value import ONE, ZERO, is_positive
from yieldsync.domain.services.pool_lookup import find_by_pid


class HopOperation(str, Enum):
    INVERT = "invert"
    MULTIPLY = "multiply"


@dataclass(frozen=True)
class PivotHop:
    pid: int
    operation: HopOperation


PivotChains = Mapping[QuoteToken, Sequence[PivotHop]]


def derive_usd_rate(collection: Iterable[PoolRecord], hops: Sequence[PivotHop]) -> Decimal:
    """Walk ``hops`` from a rate of 1, ending in a USD-denominated rate.

    A missing pivot pool or a missing/zero ``token_price_vs_quote`` anywhere in
    the chain makes the whole result zero.
    """
    records = tuple(collection)
    rate = ONE
    for hop in hops:
        pool = find_by_pid(records, hop.pid)
        price = pool.token_price_vs_quote if pool is not None else None
        if not is_positive(price):
            return ZERO
        if hop.operation is HopOperation.INVERT:
            rate = rate * (ONE / price)
        else:
            rate = rate * price
    return rate


def build_pivot_chains(*, native_usd_pid: int = 1, governance_native_pid: int = 4) -> dict[QuoteToken, tuple[PivotHop, ...]]:
    # native/USD-peg pool is inverted to USD per native; governance/native multiplies on top.
    native_hop = PivotHop(pid=native_usd_pid, operation=HopOperation.INVERT)
    return {
        QuoteToken.USDT: (),
        QuoteToken.AVAX: (native_hop,),
        QuoteToken.LYD: (
            native_hop,
            PivotHop(pid=governance_native_pid, operation=HopOperation.MULTIPLY),
        ),
    }


def quote_prices_usd(collection: Iterable[PoolRecord], chains: PivotChains) -> dict[QuoteToken, Decimal]:
    records = tuple(collection)
    return {token: derive_usd_rate(records, hops) for token, hops in chains.items()}
