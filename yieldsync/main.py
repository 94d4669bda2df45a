from __future__ import annotations

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from yieldsync.api.deps import build_runtime
from yieldsync.api.routers.market import router as market_router
from yieldsync.api.routers.pools import router as pools_router
from yieldsync.shared.config import get_settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    runtime = build_runtime(settings)
    app.state.runtime = runtime
    runtime.scheduler.start()
    try:
        yield
    finally:
        await runtime.aclose()
        app.state.runtime = None


app = FastAPI(title="Yield Sync API", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Literal /v1/prices paths must win over /v1/{kind}/{pid}.
app.include_router(market_router)
app.include_router(pools_router)
