from __future__ import annotations

from decimal import Decimal

import pytest

from yieldsync.domain.entities.pool import PoolRecord, UserPosition
from yieldsync.domain.services.cross_rate import build_pivot_chains


@pytest.fixture
def chains():
    return build_pivot_chains(native_usd_pid=1, governance_native_pid=4)


@pytest.fixture
def pivot_farms() -> tuple[PoolRecord, ...]:
    return (
        PoolRecord(pid=1, lp_symbol="AVAX-USDT LP", quote_token_symbol="USDT", token_price_vs_quote=Decimal("2.0")),
        PoolRecord(pid=4, lp_symbol="LYD-AVAX LP", quote_token_symbol="AVAX", token_price_vs_quote=Decimal("0.05")),
    )


@pytest.fixture
def staked_farm() -> PoolRecord:
    return PoolRecord(
        pid=7,
        lp_symbol="PNG-AVAX LP",
        quote_token_symbol="AVAX",
        token_price_vs_quote=Decimal("0.3"),
        lp_token_balance_mc=Decimal("100"),
        lp_total_in_quote_token=Decimal("500"),
        user_data=UserPosition(
            staked_balance=Decimal("10"),
            allowance=Decimal("1000"),
            token_balance=Decimal("3"),
            earnings=Decimal("0.7"),
        ),
    )
