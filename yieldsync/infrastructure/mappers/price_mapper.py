from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from yieldsync.domain.services.decimal_value import parse_decimal
from yieldsync.domain.services.price_feed import normalize_symbol


def map_price_payload(payload: Mapping[str, Any]) -> dict[str, Decimal]:
    bucket = payload.get("prices")
    if bucket is None:
        bucket = payload.get("data")
    if not isinstance(bucket, Mapping):
        raise ValueError("price payload has no prices mapping.")
    prices: dict[str, Decimal] = {}
    for symbol, raw in bucket.items():
        price = parse_decimal(raw)
        if price is None:
            continue
        prices[normalize_symbol(str(symbol))] = price
    return prices
