from __future__ import annotations

import httpx

from yieldsync.domain.exceptions import DataSourceError
from yieldsync.infrastructure.clients.http_json import request_json


class JsonRpcBlockClient:
    def __init__(self, *, rpc_url: str, client: httpx.AsyncClient):
        self.rpc_url = rpc_url
        self._client = client

    async def get_block_number(self) -> int:
        payload = await request_json(
            self._client,
            "POST",
            self.rpc_url,
            json={"jsonrpc": "2.0", "id": 1, "method": "eth_blockNumber", "params": []},
        )
        if not isinstance(payload, dict):
            raise DataSourceError("RPC returned a non-object payload.")
        if payload.get("error"):
            raise DataSourceError(f"RPC error: {payload['error']}")
        result = payload.get("result")
        try:
            return int(result, 16)
        except (TypeError, ValueError) as exc:
            raise DataSourceError(f"Invalid block number: {result!r}") from exc
