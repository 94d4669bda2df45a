from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
import os

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


@dataclass(frozen=True)
class Settings:
    pool_data_api_base: str
    price_api_url: str
    rpc_url: str
    http_timeout_seconds: float
    fast_refresh_seconds: float
    slow_refresh_seconds: float
    chain_head_refresh_seconds: float
    native_usd_pivot_pid: int
    governance_native_pivot_pid: int
    price_override_symbol: str
    price_override_usd: Decimal
    log_level: str


def get_settings() -> Settings:
    return Settings(
        pool_data_api_base=_env("POOL_DATA_API_BASE", "http://localhost:8080/api"),
        price_api_url=_env("PRICE_API_URL", "https://api.lydia.finance/api/v1/prices"),
        rpc_url=_env("RPC_URL", "https://api.avax.network/ext/bc/C/rpc"),
        http_timeout_seconds=float(_env("HTTP_TIMEOUT_SECONDS", "10")),
        fast_refresh_seconds=float(_env("FAST_REFRESH_SECONDS", "10")),
        slow_refresh_seconds=float(_env("SLOW_REFRESH_SECONDS", "60")),
        chain_head_refresh_seconds=float(_env("CHAIN_HEAD_REFRESH_SECONDS", "6")),
        native_usd_pivot_pid=int(_env("NATIVE_USD_PIVOT_PID", "1")),
        governance_native_pivot_pid=int(_env("GOVERNANCE_NATIVE_PIVOT_PID", "4")),
        price_override_symbol=_env("PRICE_OVERRIDE_SYMBOL", "olive"),
        price_override_usd=Decimal(_env("PRICE_OVERRIDE_USD", "0.158")),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
    )
