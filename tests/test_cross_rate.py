from __future__ import annotations

from dataclasses import replace
from decimal import Decimal

from yieldsync.domain.entities.pool import PoolRecord, QuoteToken
from yieldsync.domain.services.cross_rate import (
    HopOperation,
    PivotHop,
    build_pivot_chains,
    derive_usd_rate,
    quote_prices_usd,
)


def test_governance_price_chains_native_inversion_and_multiplication(pivot_farms, chains):
    prices = quote_prices_usd(pivot_farms, chains)

    assert prices[QuoteToken.AVAX] == Decimal("0.5")
    assert prices[QuoteToken.LYD] == Decimal("0.025")
    assert prices[QuoteToken.USDT] == Decimal("1")


def test_chain_result_equals_inverse_times_multiplier():
    p1 = Decimal("3")
    p2 = Decimal("0.07")
    farms = (
        PoolRecord(pid=1, lp_symbol="a", quote_token_symbol="USDT", token_price_vs_quote=p1),
        PoolRecord(pid=4, lp_symbol="b", quote_token_symbol="AVAX", token_price_vs_quote=p2),
    )
    hops = build_pivot_chains()[QuoteToken.LYD]

    assert derive_usd_rate(farms, hops) == (Decimal("1") / p1) * p2


def test_missing_pivot_pool_zeroes_the_chain(pivot_farms, chains):
    only_native = pivot_farms[:1]

    prices = quote_prices_usd(only_native, chains)

    assert prices[QuoteToken.AVAX] == Decimal("0.5")
    assert prices[QuoteToken.LYD] == Decimal("0")


def test_absent_or_zero_price_zeroes_the_chain(pivot_farms, chains):
    unfetched = (replace(pivot_farms[0], token_price_vs_quote=None), pivot_farms[1])
    zero = (replace(pivot_farms[0], token_price_vs_quote=Decimal("0")), pivot_farms[1])

    assert quote_prices_usd(unfetched, chains)[QuoteToken.LYD] == Decimal("0")
    assert quote_prices_usd(zero, chains)[QuoteToken.AVAX] == Decimal("0")


def test_empty_chain_is_identity():
    assert derive_usd_rate((), ()) == Decimal("1")


def test_custom_hops_apply_in_order():
    farms = (
        PoolRecord(pid=10, lp_symbol="x", quote_token_symbol="USDT", token_price_vs_quote=Decimal("4")),
        PoolRecord(pid=11, lp_symbol="y", quote_token_symbol="USDT", token_price_vs_quote=Decimal("2")),
    )
    hops = (
        PivotHop(pid=10, operation=HopOperation.MULTIPLY),
        PivotHop(pid=11, operation=HopOperation.INVERT),
    )

    assert derive_usd_rate(farms, hops) == Decimal("2")


def test_build_pivot_chains_covers_every_quote_token():
    assert set(build_pivot_chains()) == set(QuoteToken)
