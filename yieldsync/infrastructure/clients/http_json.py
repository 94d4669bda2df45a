from __future__ import annotations

from typing import Any

import httpx

from yieldsync.domain.exceptions import DataSourceError


async def request_json(client: httpx.AsyncClient, method: str, url: str, **kwargs: Any) -> Any:
    try:
        response = await client.request(method, url, **kwargs)
        response.raise_for_status()
        return response.json()
    except httpx.HTTPError as exc:
        raise DataSourceError(f"{method} {url} failed: {exc}") from exc
    except ValueError as exc:
        raise DataSourceError(f"{method} {url} returned invalid JSON.") from exc
