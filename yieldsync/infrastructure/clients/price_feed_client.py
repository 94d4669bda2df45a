from __future__ import annotations

from decimal import Decimal

import httpx

from yieldsync.domain.exceptions import DataSourceError
from yieldsync.infrastructure.clients.http_json import request_json
from yieldsync.infrastructure.mappers.price_mapper import map_price_payload


class PriceApiClient:
    def __init__(self, *, url: str, client: httpx.AsyncClient):
        self.url = url
        self._client = client

    async def fetch_prices(self) -> dict[str, Decimal]:
        payload = await request_json(self._client, "GET", self.url)
        if not isinstance(payload, dict):
            raise DataSourceError("Price API returned a non-object payload.")
        try:
            return map_price_payload(payload)
        except ValueError as exc:
            raise DataSourceError(str(exc)) from exc
