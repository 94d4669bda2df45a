from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import Decimal

from yieldsync.domain.entities.pool import PoolRecord, QuoteToken, UserPosition
from yieldsync.domain.entities.valuation import ValuationRecord
from yieldsync.domain.services.decimal_value import ZERO, or_zero, safe_div


_EMPTY_POSITION = UserPosition()


def resolve_quote_token(symbol: str | None) -> QuoteToken | None:
    if not symbol:
        return None
    try:
        return QuoteToken(symbol.strip().upper())
    except ValueError:
        return None


def staked_in_quote_token(pool: PoolRecord | None, staked_balance: Decimal) -> Decimal:
    if pool is None:
        return ZERO
    return safe_div(staked_balance, pool.lp_token_balance_mc) * or_zero(pool.lp_total_in_quote_token)


def quote_price_for(pool: PoolRecord | None, quote_prices: Mapping[QuoteToken, Decimal]) -> Decimal:
    if pool is None:
        return ZERO
    token = resolve_quote_token(pool.quote_token_symbol)
    if token is None:
        return ZERO
    return quote_prices.get(token, ZERO)


def value_position(
    pid: int,
    pool: PoolRecord | None,
    quote_prices: Mapping[QuoteToken, Decimal],
) -> ValuationRecord:
    """USD view of the connected wallet's position in ``pool``.

    Absent pool or absent user data yields a zero-filled record.
    """
    position = pool.user_data if pool is not None and pool.user_data is not None else _EMPTY_POSITION
    staked_balance = or_zero(position.staked_balance)
    in_quote = staked_in_quote_token(pool, staked_balance)
    return ValuationRecord(
        pid=pid,
        pool=pool,
        staked_balance=staked_balance,
        allowance=or_zero(position.allowance),
        token_balance=or_zero(position.token_balance),
        earnings=or_zero(position.earnings),
        pending_reward=or_zero(position.pending_reward),
        staked_in_quote_token=in_quote,
        staked_usd=in_quote * quote_price_for(pool, quote_prices),
    )


def value_collection(
    collection: Iterable[PoolRecord],
    quote_prices: Mapping[QuoteToken, Decimal],
) -> list[ValuationRecord]:
    return [value_position(pool.pid, pool, quote_prices) for pool in collection]
