from __future__ import annotations

from yieldsync.domain.entities.pool import PoolRecord
from yieldsync.domain.services.pool_lookup import find_by_pid, find_by_symbol


POOLS = (
    PoolRecord(pid=0, lp_symbol="LYD", quote_token_symbol="AVAX"),
    PoolRecord(pid=1, lp_symbol="AVAX-USDT LP", quote_token_symbol="USDT"),
    PoolRecord(pid=4, lp_symbol="LYD-AVAX LP", quote_token_symbol="AVAX"),
)


def test_find_by_pid_returns_matching_record():
    assert find_by_pid(POOLS, 4).lp_symbol == "LYD-AVAX LP"
    assert find_by_pid(POOLS, 0).lp_symbol == "LYD"


def test_find_by_symbol_returns_matching_record():
    assert find_by_symbol(POOLS, "AVAX-USDT LP").pid == 1


def test_lookups_return_none_when_absent():
    assert find_by_pid(POOLS, 99) is None
    assert find_by_symbol(POOLS, "missing") is None
    assert find_by_pid((), 1) is None
