from __future__ import annotations

from dataclasses import dataclass

from fastapi import HTTPException, Request
import httpx

from yieldsync.application.scheduler import RefreshScheduler
from yieldsync.application.selectors import SnapshotSelectors
from yieldsync.application.store import Store
from yieldsync.application.use_cases.sync_data import SyncDataUseCase
from yieldsync.domain.services.cross_rate import build_pivot_chains
from yieldsync.domain.services.price_feed import PriceOverride
from yieldsync.infrastructure.clients.block_client import JsonRpcBlockClient
from yieldsync.infrastructure.clients.pool_data_client import PoolDataApiClient
from yieldsync.infrastructure.clients.price_feed_client import PriceApiClient
from yieldsync.shared.config import Settings


@dataclass
class Runtime:
    store: Store
    scheduler: RefreshScheduler
    sync: SyncDataUseCase
    http_client: httpx.AsyncClient

    def set_account(self, account: str | None) -> None:
        self.store.set_account(account)
        self.scheduler.set_account(account)

    async def aclose(self) -> None:
        self.scheduler.stop()
        self.sync.close()
        await self.http_client.aclose()


def build_store(settings: Settings) -> Store:
    chains = build_pivot_chains(
        native_usd_pid=settings.native_usd_pivot_pid,
        governance_native_pid=settings.governance_native_pivot_pid,
    )
    override = PriceOverride(
        symbol=settings.price_override_symbol,
        price_usd=settings.price_override_usd,
    )
    return Store(chains=chains, override=override)


def build_runtime(settings: Settings, *, http_client: httpx.AsyncClient | None = None) -> Runtime:
    client = http_client or httpx.AsyncClient(timeout=settings.http_timeout_seconds)
    store = build_store(settings)
    sync = SyncDataUseCase(
        store=store,
        pool_data_port=PoolDataApiClient(api_base=settings.pool_data_api_base, client=client),
        price_feed_port=PriceApiClient(url=settings.price_api_url, client=client),
        block_port=JsonRpcBlockClient(rpc_url=settings.rpc_url, client=client),
    )
    scheduler = RefreshScheduler(
        fast_interval_seconds=settings.fast_refresh_seconds,
        slow_interval_seconds=settings.slow_refresh_seconds,
        chain_head_interval_seconds=settings.chain_head_refresh_seconds,
        block_source=lambda: store.snapshot.block.current_block,
    )
    scheduler.register_slow_refresh(sync.refresh_public_data)
    scheduler.register_slow_refresh(sync.refresh_prices)
    scheduler.register_fast_refresh(sync.refresh_user_data)
    scheduler.register_chain_head_refresh(sync.refresh_block)
    return Runtime(store=store, scheduler=scheduler, sync=sync, http_client=client)


def get_runtime(request: Request) -> Runtime:
    runtime = getattr(request.app.state, "runtime", None)
    if runtime is None:
        raise HTTPException(status_code=503, detail="Runtime is not initialised.")
    return runtime


def get_selectors(request: Request) -> SnapshotSelectors:
    return get_runtime(request).store.selectors()
