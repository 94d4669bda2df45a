from __future__ import annotations

from pydantic import BaseModel, Field


class DerivedPriceResponse(BaseModel):
    symbol: str
    price_usd: str = Field(..., description="Zero when the price cannot be determined.")


class ApiPricesResponse(BaseModel):
    prices: dict[str, str] | None = None


class BlockResponse(BaseModel):
    current_block: int
    initial_block: int


class AccountRequest(BaseModel):
    account: str | None = None


class AccountResponse(BaseModel):
    account: str | None = None
    fast_refresh_active: bool
