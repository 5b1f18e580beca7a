"""Environment-driven settings."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from trading_dashboard.providers.massive import MASSIVE_BASE_URL

DEFAULT_CLAUDE_MODEL = "claude-sonnet-4-5-20250929"


@dataclass(frozen=True)
class Settings:
    """Runtime settings for local/stdio and HTTP-hosted modes."""

    app_name: str = "trading-dashboard"
    app_version: str = "1.0.0"
    app_env: str = "development"
    transport_mode: str = "auto"
    http_transport: str = "sse"
    host: str = "0.0.0.0"
    port: int = 8000
    mcp_path: str = "/mcp"
    health_path: str = "/health"
    massive_api_key: str | None = None
    massive_base_url: str = MASSIVE_BASE_URL
    claude_api_key: str | None = None
    claude_model: str = DEFAULT_CLAUDE_MODEL
    request_timeout_seconds: float = 15.0
    default_account_size: float = 25000.0
    default_risk_percentage: float = 2.0
    commission_per_trade: float = 6.95
    chat_history_limit: int = 20
    ticker_volume_limit: int = 10

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


def _as_int(value: str | None, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _as_float(value: str | None, default: float) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        return default


def get_settings() -> Settings:
    """Load runtime settings from environment variables."""
    load_dotenv()

    return Settings(
        app_env=os.getenv("APP_ENV", "development").strip().lower(),
        transport_mode=os.getenv("TRANSPORT_MODE", "auto").strip().lower(),
        http_transport=os.getenv("HTTP_TRANSPORT", "sse").strip().lower(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_as_int(os.getenv("PORT"), 8000),
        mcp_path=os.getenv("MCP_PATH", "/mcp"),
        health_path=os.getenv("HEALTH_PATH", "/health"),
        massive_api_key=os.getenv("MASSIVE_API_KEY") or None,
        massive_base_url=os.getenv("MASSIVE_BASE_URL") or MASSIVE_BASE_URL,
        claude_api_key=os.getenv("CLAUDE_API_KEY") or os.getenv("ANTHROPIC_API_KEY") or None,
        claude_model=os.getenv("CLAUDE_MODEL") or os.getenv("ANTHROPIC_MODEL") or DEFAULT_CLAUDE_MODEL,
        request_timeout_seconds=_as_float(os.getenv("REQUEST_TIMEOUT_SECONDS"), 15.0),
        default_account_size=_as_float(os.getenv("DEFAULT_ACCOUNT_SIZE"), 25000.0),
        default_risk_percentage=_as_float(os.getenv("DEFAULT_RISK_PERCENTAGE"), 2.0),
        commission_per_trade=_as_float(os.getenv("COMMISSION_PER_TRADE"), 6.95),
        chat_history_limit=max(1, _as_int(os.getenv("CHAT_HISTORY_LIMIT"), 20)),
        ticker_volume_limit=max(1, _as_int(os.getenv("TICKER_VOLUME_LIMIT"), 10)),
    )
