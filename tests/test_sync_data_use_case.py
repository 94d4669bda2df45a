from __future__ import annotations

import asyncio
from decimal import Decimal

import httpx

from yieldsync.application.store import Store
from yieldsync.application.use_cases.sync_data import SyncDataUseCase
from yieldsync.domain.entities.pool import PoolKind, PoolRecord, UserPosition
from yieldsync.domain.exceptions import DataSourceError
from yieldsync.infrastructure.clients.pool_data_client import PoolDataApiClient


class FakePoolDataPort:
    def __init__(self, *, fail_kinds: set[PoolKind] | None = None):
        self.fail_kinds = fail_kinds or set()
        self.user_calls: list[tuple[PoolKind, str]] = []

    async def fetch_public_data(self, kind: PoolKind) -> list[PoolRecord]:
        if kind in self.fail_kinds:
            raise DataSourceError("indexer down")
        return [
            PoolRecord(
                pid=1,
                lp_symbol=f"{kind.value}-1",
                quote_token_symbol="AVAX",
                token_price_vs_quote=Decimal("2"),
                lp_token_balance_mc=Decimal("100"),
                lp_total_in_quote_token=Decimal("500"),
            )
        ]

    async def fetch_user_data(self, kind: PoolKind, *, account: str) -> dict[int, UserPosition]:
        self.user_calls.append((kind, account))
        if kind in self.fail_kinds:
            raise DataSourceError("indexer down")
        return {1: UserPosition(staked_balance=Decimal("10"))}


class FakePriceFeedPort:
    def __init__(self, *, fail: bool = False):
        self.fail = fail

    async def fetch_prices(self) -> dict[str, Decimal]:
        if self.fail:
            raise DataSourceError("price api down")
        return {"png": Decimal("0.4")}


class FakeBlockPort:
    def __init__(self, number: int = 1234):
        self.number = number

    async def get_block_number(self) -> int:
        return self.number


def _use_case(chains, **ports) -> tuple[SyncDataUseCase, Store]:
    store = Store(chains=chains)
    use_case = SyncDataUseCase(
        store=store,
        pool_data_port=ports.get("pool_data_port", FakePoolDataPort()),
        price_feed_port=ports.get("price_feed_port", FakePriceFeedPort()),
        block_port=ports.get("block_port", FakeBlockPort()),
    )
    return use_case, store


def test_refresh_public_data_commits_every_collection(chains):
    use_case, store = _use_case(chains)

    asyncio.run(use_case.refresh_public_data())

    for kind in PoolKind:
        assert store.snapshot.collection(kind)[0].lp_symbol == f"{kind.value}-1"


def test_failed_collection_keeps_last_known_good_snapshot(chains):
    port = FakePoolDataPort()
    use_case, store = _use_case(chains, pool_data_port=port)
    asyncio.run(use_case.refresh_public_data())
    good_farms = store.snapshot.farms

    port.fail_kinds = {PoolKind.FARM}
    asyncio.run(use_case.refresh_public_data())

    assert store.snapshot.farms == good_farms
    assert store.snapshot.pools[0].lp_symbol == "pools-1"


def test_refresh_user_data_writes_positions_for_connected_account(chains):
    use_case, store = _use_case(chains)
    asyncio.run(use_case.refresh_public_data())
    store.set_account("0xabc")

    asyncio.run(use_case.refresh_user_data("0xabc"))

    assert store.snapshot.farms[0].user_data.staked_balance == Decimal("10")
    assert store.selectors().get_position_valuation(1).staked_in_quote_token == Decimal("50")


def test_user_data_for_disconnected_account_is_dropped(chains):
    use_case, store = _use_case(chains)
    asyncio.run(use_case.refresh_public_data())
    store.set_account("0xnew")

    asyncio.run(use_case.refresh_user_data("0xold"))

    assert all(pool.user_data is None for pool in store.snapshot.farms)


def test_prices_and_block_are_committed(chains):
    use_case, store = _use_case(chains)

    asyncio.run(use_case.refresh_prices())
    asyncio.run(use_case.refresh_block())

    assert store.snapshot.prices["png"] == Decimal("0.4")
    assert store.snapshot.block.current_block == 1234


def test_price_failure_keeps_previous_feed(chains):
    feed = FakePriceFeedPort()
    use_case, store = _use_case(chains, price_feed_port=feed)
    asyncio.run(use_case.refresh_prices())

    feed.fail = True
    asyncio.run(use_case.refresh_prices())

    assert store.snapshot.prices["png"] == Decimal("0.4")


def test_completions_after_close_are_dropped(chains):
    use_case, store = _use_case(chains)
    version = store.snapshot.version

    use_case.close()
    asyncio.run(use_case.refresh_public_data())
    asyncio.run(use_case.refresh_prices())
    asyncio.run(use_case.refresh_block())

    assert use_case.closed
    assert store.snapshot.version == version


def test_malformed_user_payload_for_one_kind_does_not_stop_the_others(chains):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/farms/users/0xabc":
            return httpx.Response(200, json={"data": "maintenance"})
        return httpx.Response(200, json={"1": {"stakedBalance": "4"}})

    async def scenario():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            use_case, store = _use_case(
                chains,
                pool_data_port=PoolDataApiClient(api_base="https://indexer.test/api", client=client),
            )
            for kind in PoolKind:
                record = PoolRecord(pid=1, lp_symbol=f"{kind.value}-1", quote_token_symbol="AVAX")
                store.commit_public_data(kind, [record])
            store.set_account("0xabc")
            await use_case.refresh_user_data("0xabc")
            return store

    store = asyncio.run(scenario())

    assert store.snapshot.farms[0].user_data is None
    assert store.snapshot.pools[0].user_data.staked_balance == Decimal("4")
    assert store.snapshot.maximus[0].user_data.staked_balance == Decimal("4")
