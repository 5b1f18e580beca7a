"""Tool service wiring and registration."""

from __future__ import annotations

from dataclasses import dataclass

from mcp.server.fastmcp import FastMCP

from trading_dashboard.runtime.monitoring import ServerMetrics
from trading_dashboard.services.base import ServiceContext
from trading_dashboard.services.chat_service import ChatService
from trading_dashboard.services.dashboard_service import DashboardService
from trading_dashboard.services.market_service import MarketService
from trading_dashboard.tools.alert_tools import register_alert_tools
from trading_dashboard.tools.chat_tools import register_chat_tools
from trading_dashboard.tools.market_tools import register_market_tools
from trading_dashboard.tools.portfolio_tools import register_portfolio_tools
from trading_dashboard.tools.settings_tools import register_settings_tools
from trading_dashboard.tools.trade_tools import register_trade_tools
from trading_dashboard.tools.watchlist_tools import register_watchlist_tools


@dataclass
class ToolServices:
    dashboard: DashboardService
    market: MarketService
    chat: ChatService
    store: object
    metrics: ServerMetrics


def build_tool_services(
    ctx: ServiceContext,
    commission: float = 6.95,
    chat_history_limit: int = 20,
    ticker_volume_limit: int = 10,
    allow_seed: bool = True,
    metrics: ServerMetrics | None = None,
) -> ToolServices:
    market = MarketService(ctx)
    return ToolServices(
        dashboard=DashboardService(
            ctx,
            price_lookup=market.get_live_quote,
            default_fee=commission,
            ticker_volume_limit=ticker_volume_limit,
            allow_seed=allow_seed,
        ),
        market=market,
        chat=ChatService(ctx, commission=commission, history_limit=chat_history_limit),
        store=ctx.store,
        metrics=metrics or ServerMetrics(),
    )


def register_all_tools(mcp: FastMCP, services: ToolServices) -> None:
    register_watchlist_tools(mcp, services)
    register_portfolio_tools(mcp, services)
    register_trade_tools(mcp, services)
    register_alert_tools(mcp, services)
    register_settings_tools(mcp, services)
    register_market_tools(mcp, services)
    register_chat_tools(mcp, services)
