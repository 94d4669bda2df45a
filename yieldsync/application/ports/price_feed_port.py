from __future__ import annotations

from decimal import Decimal
from typing import Protocol


class PriceFeedPort(Protocol):
    async def fetch_prices(self) -> dict[str, Decimal]:
        ...
