from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from yieldsync.domain.entities.pool import PoolRecord


@dataclass(frozen=True)
class ValuationRecord:
    pid: int
    pool: PoolRecord | None
    staked_balance: Decimal
    allowance: Decimal
    token_balance: Decimal
    earnings: Decimal
    pending_reward: Decimal
    staked_in_quote_token: Decimal
    staked_usd: Decimal
