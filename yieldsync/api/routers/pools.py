from __future__ import annotations

from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException

from yieldsync.api.deps import get_selectors
from yieldsync.api.schemas.pools import PoolResponse, UserPositionResponse, ValuationResponse
from yieldsync.application.selectors import SnapshotSelectors
from yieldsync.domain.entities.pool import PoolKind, PoolRecord
from yieldsync.domain.entities.valuation import ValuationRecord

router = APIRouter()


def _dec_to_str_or_none(value: Decimal | None) -> str | None:
    return str(value) if value is not None else None


def _pool_response(pool: PoolRecord) -> PoolResponse:
    user = pool.user_data
    return PoolResponse(
        pid=pool.pid,
        lp_symbol=pool.lp_symbol,
        quote_token_symbol=pool.quote_token_symbol,
        token_price_vs_quote=_dec_to_str_or_none(pool.token_price_vs_quote),
        lp_token_balance_mc=_dec_to_str_or_none(pool.lp_token_balance_mc),
        lp_total_in_quote_token=_dec_to_str_or_none(pool.lp_total_in_quote_token),
        user_data=(
            UserPositionResponse(
                staked_balance=_dec_to_str_or_none(user.staked_balance),
                allowance=_dec_to_str_or_none(user.allowance),
                token_balance=_dec_to_str_or_none(user.token_balance),
                earnings=_dec_to_str_or_none(user.earnings),
                pending_reward=_dec_to_str_or_none(user.pending_reward),
            )
            if user is not None
            else None
        ),
    )


def _valuation_response(valuation: ValuationRecord) -> ValuationResponse:
    return ValuationResponse(
        pid=valuation.pid,
        pool=_pool_response(valuation.pool) if valuation.pool is not None else None,
        staked_balance=str(valuation.staked_balance),
        allowance=str(valuation.allowance),
        token_balance=str(valuation.token_balance),
        earnings=str(valuation.earnings),
        pending_reward=str(valuation.pending_reward),
        staked_in_quote_token=str(valuation.staked_in_quote_token),
        staked_usd=str(valuation.staked_usd),
    )


@router.get("/v1/maximus-valuations", response_model=list[ValuationResponse])
def list_maximus_valuations(selectors: SnapshotSelectors = Depends(get_selectors)):
    return [_valuation_response(row) for row in selectors.get_maximus_valuations()]


@router.get("/v1/{kind}/by-symbol/{symbol}", response_model=PoolResponse)
def get_pool_by_symbol(
    kind: PoolKind,
    symbol: str,
    selectors: SnapshotSelectors = Depends(get_selectors),
):
    pool = selectors.get_pool_by_symbol(symbol, kind)
    if pool is None:
        raise HTTPException(status_code=404, detail="Pool not found.")
    return _pool_response(pool)


@router.get("/v1/{kind}/{pid}/valuation", response_model=ValuationResponse)
def get_position_valuation(
    kind: PoolKind,
    pid: int,
    selectors: SnapshotSelectors = Depends(get_selectors),
):
    return _valuation_response(selectors.get_position_valuation(pid, kind))


@router.get("/v1/{kind}/{pid}", response_model=PoolResponse)
def get_pool_by_id(
    kind: PoolKind,
    pid: int,
    selectors: SnapshotSelectors = Depends(get_selectors),
):
    pool = selectors.get_pool_by_id(pid, kind)
    if pool is None:
        raise HTTPException(status_code=404, detail="Pool not found.")
    return _pool_response(pool)
