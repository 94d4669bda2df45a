from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal


def normalize_symbol(value: str) -> str:
    return value.strip().lower()


@dataclass(frozen=True)
class PriceOverride:
    """Fixed USD price for a single feed symbol.

    Workaround for the olive electrum pool, whose feed price is unusable.
    """

    symbol: str
    price_usd: Decimal

    def matches(self, symbol: str) -> bool:
        return normalize_symbol(symbol) == normalize_symbol(self.symbol)


def apply_override(
    prices: Mapping[str, Decimal] | None,
    override: PriceOverride | None,
) -> dict[str, Decimal] | None:
    if prices is None:
        return None
    merged = dict(prices)
    if override is not None:
        merged[normalize_symbol(override.symbol)] = override.price_usd
    return merged


def lookup_price(
    prices: Mapping[str, Decimal] | None,
    symbol: str,
    override: PriceOverride | None = None,
) -> Decimal | None:
    if override is not None and override.matches(symbol):
        return override.price_usd
    if prices is None:
        return None
    return prices.get(normalize_symbol(symbol))
