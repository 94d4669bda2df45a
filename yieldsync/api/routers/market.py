from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from yieldsync.api.deps import Runtime, get_runtime, get_selectors
from yieldsync.api.schemas.market import (
    AccountRequest,
    AccountResponse,
    ApiPricesResponse,
    BlockResponse,
    DerivedPriceResponse,
)
from yieldsync.application.scheduler import Cadence, TaskState
from yieldsync.application.selectors import SnapshotSelectors
from yieldsync.domain.exceptions import InvalidAccountError
from yieldsync.domain.services.account import normalize_account

router = APIRouter()


@router.get("/v1/prices", response_model=ApiPricesResponse)
def get_api_prices(selectors: SnapshotSelectors = Depends(get_selectors)):
    prices = selectors.get_api_prices()
    if prices is None:
        return ApiPricesResponse(prices=None)
    return ApiPricesResponse(prices={symbol: str(price) for symbol, price in prices.items()})


@router.get("/v1/prices/{symbol}", response_model=DerivedPriceResponse)
def get_derived_usd_price(symbol: str, selectors: SnapshotSelectors = Depends(get_selectors)):
    return DerivedPriceResponse(symbol=symbol, price_usd=str(selectors.get_derived_usd_price(symbol)))


@router.get("/v1/block", response_model=BlockResponse)
def get_block(selectors: SnapshotSelectors = Depends(get_selectors)):
    block = selectors.get_block()
    return BlockResponse(current_block=block.current_block, initial_block=block.initial_block)


@router.put("/v1/account", response_model=AccountResponse)
async def set_account(req: AccountRequest, runtime: Runtime = Depends(get_runtime)):
    try:
        account = normalize_account(req.account)
    except InvalidAccountError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    runtime.set_account(account)
    return AccountResponse(
        account=account,
        fast_refresh_active=runtime.scheduler.task_state(Cadence.FAST) is not TaskState.IDLE,
    )
