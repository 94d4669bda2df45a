from __future__ import annotations

from pydantic import BaseModel, Field


class UserPositionResponse(BaseModel):
    staked_balance: str | None = None
    allowance: str | None = None
    token_balance: str | None = None
    earnings: str | None = None
    pending_reward: str | None = None


class PoolResponse(BaseModel):
    pid: int = Field(..., description="pid for farms/maximus, sousId for staking pools.")
    lp_symbol: str
    quote_token_symbol: str
    token_price_vs_quote: str | None = None
    lp_token_balance_mc: str | None = None
    lp_total_in_quote_token: str | None = None
    user_data: UserPositionResponse | None = None


class ValuationResponse(BaseModel):
    pid: int
    pool: PoolResponse | None = None
    staked_balance: str
    allowance: str
    token_balance: str
    earnings: str
    pending_reward: str
    staked_in_quote_token: str
    staked_usd: str
