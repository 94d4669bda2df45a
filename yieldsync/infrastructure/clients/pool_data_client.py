from __future__ import annotations

import logging

import httpx

from yieldsync.domain.entities.pool import PoolKind, PoolRecord, UserPosition
from yieldsync.domain.exceptions import DataSourceError
from yieldsync.infrastructure.clients.http_json import request_json
from yieldsync.infrastructure.mappers.pool_mapper import map_rows_to_pool_records, map_user_data_payload


logger = logging.getLogger(__name__)


class PoolDataApiClient:
    """Reads raw farm, pool and maximus records from the indexer HTTP API."""

    def __init__(self, *, api_base: str, client: httpx.AsyncClient):
        self.api_base = api_base.rstrip("/")
        self._client = client

    async def fetch_public_data(self, kind: PoolKind) -> list[PoolRecord]:
        payload = await request_json(self._client, "GET", f"{self.api_base}/{kind.value}")
        rows = payload.get("data") if isinstance(payload, dict) else payload
        if not isinstance(rows, list):
            raise DataSourceError(f"Unexpected public payload for {kind.value}.")
        records = map_rows_to_pool_records(rows, kind)
        logger.info("pool_data_client: fetched_public kind=%s rows=%s records=%s", kind.value, len(rows), len(records))
        return records

    async def fetch_user_data(self, kind: PoolKind, *, account: str) -> dict[int, UserPosition]:
        payload = await request_json(
            self._client,
            "GET",
            f"{self.api_base}/{kind.value}/users/{account.lower()}",
        )
        if isinstance(payload, dict) and "data" in payload:
            payload = payload["data"]
        try:
            positions = map_user_data_payload(payload, kind)
        except ValueError as exc:
            raise DataSourceError(str(exc)) from exc
        logger.info(
            "pool_data_client: fetched_user kind=%s account=%s positions=%s",
            kind.value,
            account,
            len(positions),
        )
        return positions
