from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class QuoteToken(str, Enum):
    USDT = "USDT"
    AVAX = "AVAX"
    LYD = "LYD"


class PoolKind(str, Enum):
    FARM = "farms"
    POOL = "pools"
    MAXIMUS = "maximus"


@dataclass(frozen=True)
class UserPosition:
    staked_balance: Decimal | None = None
    allowance: Decimal | None = None
    token_balance: Decimal | None = None
    earnings: Decimal | None = None
    pending_reward: Decimal | None = None


@dataclass(frozen=True)
class PoolRecord:
    """Farm, staking pool or maximus vault as last fetched.

    ``pid`` holds the ``sousId`` for staking pools. ``quote_token_symbol`` stays a
    plain string so unrecognised quote tokens survive ingestion.
    """

    pid: int
    lp_symbol: str
    quote_token_symbol: str
    token_price_vs_quote: Decimal | None = None
    lp_token_balance_mc: Decimal | None = None
    lp_total_in_quote_token: Decimal | None = None
    user_data: UserPosition | None = None
