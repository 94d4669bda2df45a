from __future__ import annotations

from collections.abc import Iterable, Mapping
import logging
from typing import Any

from yieldsync.domain.entities.pool import PoolKind, PoolRecord, UserPosition
from yieldsync.domain.services.decimal_value import parse_decimal


logger = logging.getLogger(__name__)


def _row_id(row: Mapping[str, Any], kind: PoolKind) -> int | None:
    key = "sousId" if kind is PoolKind.POOL else "pid"
    value = row.get(key)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def map_row_to_user_position(row: Any) -> UserPosition | None:
    if not isinstance(row, Mapping) or not row:
        return None
    return UserPosition(
        staked_balance=parse_decimal(row.get("stakedBalance")),
        allowance=parse_decimal(row.get("allowance")),
        token_balance=parse_decimal(row.get("tokenBalance")),
        earnings=parse_decimal(row.get("earnings")),
        pending_reward=parse_decimal(row.get("pendingReward")),
    )


def map_row_to_pool_record(row: Mapping[str, Any], kind: PoolKind) -> PoolRecord | None:
    pid = _row_id(row, kind)
    if pid is None:
        logger.warning("pool_mapper: skip_row_without_id kind=%s", kind.value)
        return None
    return PoolRecord(
        pid=pid,
        lp_symbol=str(row.get("lpSymbol") or row.get("tokenName") or ""),
        quote_token_symbol=str(row.get("quoteTokenSymbol") or ""),
        token_price_vs_quote=parse_decimal(row.get("tokenPriceVsQuote")),
        lp_token_balance_mc=parse_decimal(row.get("lpTokenBalanceMC")),
        lp_total_in_quote_token=parse_decimal(row.get("lpTotalInQuoteToken")),
    )


def map_rows_to_pool_records(rows: Iterable[Any], kind: PoolKind) -> list[PoolRecord]:
    records = []
    for row in rows:
        if not isinstance(row, Mapping):
            logger.warning("pool_mapper: skip_malformed_row kind=%s type=%s", kind.value, type(row).__name__)
            continue
        record = map_row_to_pool_record(row, kind)
        if record is not None:
            records.append(record)
    return records


def map_user_data_payload(payload: Any, kind: PoolKind) -> dict[int, UserPosition]:
    """Accept either ``{id: {...}}`` or ``[{pid|sousId: ..., ...}]``."""
    positions: dict[int, UserPosition] = {}
    if isinstance(payload, Mapping):
        for key, row in payload.items():
            try:
                pid = int(key)
            except (TypeError, ValueError):
                continue
            position = map_row_to_user_position(row)
            if position is not None:
                positions[pid] = position
        return positions
    if payload is None:
        return positions
    if not isinstance(payload, list):
        raise ValueError(f"user payload for {kind.value} is not a list or mapping.")
    for row in payload:
        if not isinstance(row, Mapping):
            continue
        pid = _row_id(row, kind)
        position = map_row_to_user_position(row)
        if pid is not None and position is not None:
            positions[pid] = position
    return positions
