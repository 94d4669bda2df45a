from __future__ import annotations

import logging

from yieldsync.application.ports.block_port import BlockPort
from yieldsync.application.ports.pool_data_port import PoolDataPort
from yieldsync.application.ports.price_feed_port import PriceFeedPort
from yieldsync.application.store import Store
from yieldsync.domain.entities.pool import PoolKind
from yieldsync.domain.exceptions import DataSourceError


logger = logging.getLogger(__name__)


class SyncDataUseCase:
    """Fetch-and-commit actions registered on the refresh cadences.

    A failed fetch leaves the last committed snapshot in place. Completions that
    land after ``close()`` are dropped.
    """

    def __init__(
        self,
        *,
        store: Store,
        pool_data_port: PoolDataPort,
        price_feed_port: PriceFeedPort,
        block_port: BlockPort,
    ):
        self._store = store
        self._pool_data_port = pool_data_port
        self._price_feed_port = price_feed_port
        self._block_port = block_port
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self._closed = True

    async def refresh_public_data(self) -> None:
        for kind in PoolKind:
            try:
                records = await self._pool_data_port.fetch_public_data(kind)
            except DataSourceError as exc:
                logger.warning("sync_data: public_fetch_failed kind=%s error=%s", kind.value, exc)
                continue
            if self._closed:
                logger.debug("sync_data: drop_after_close kind=%s", kind.value)
                return
            self._store.commit_public_data(kind, records)

    async def refresh_user_data(self, account: str) -> None:
        for kind in PoolKind:
            try:
                positions = await self._pool_data_port.fetch_user_data(kind, account=account)
            except DataSourceError as exc:
                logger.warning(
                    "sync_data: user_fetch_failed kind=%s account=%s error=%s",
                    kind.value,
                    account,
                    exc,
                )
                continue
            if self._closed:
                logger.debug("sync_data: drop_after_close kind=%s", kind.value)
                return
            self._store.commit_user_data(kind, account=account, positions=positions)

    async def refresh_prices(self) -> None:
        try:
            prices = await self._price_feed_port.fetch_prices()
        except DataSourceError as exc:
            logger.warning("sync_data: price_fetch_failed error=%s", exc)
            return
        if self._closed:
            return
        self._store.commit_prices(prices)

    async def refresh_block(self) -> None:
        try:
            block_number = await self._block_port.get_block_number()
        except DataSourceError as exc:
            logger.warning("sync_data: block_fetch_failed error=%s", exc)
            return
        if self._closed:
            return
        self._store.commit_block(block_number)
