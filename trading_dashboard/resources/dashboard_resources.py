"""Read-only dashboard resources."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mcp.server.fastmcp import FastMCP

from trading_dashboard.runtime.response import to_json

if TYPE_CHECKING:
    from trading_dashboard.tools.registry import ToolServices

PORTFOLIO_URI = "dashboard://portfolio"
WATCHLIST_URI = "dashboard://watchlist"
TRADES_URI = "dashboard://trades"


def register_dashboard_resources(mcp: FastMCP, services: "ToolServices") -> None:
    @mcp.resource(
        PORTFOLIO_URI,
        name="portfolio",
        title="Portfolio Overview",
        description="Holdings with stored prices, totals, sector allocation and P&L ranking.",
        mime_type="application/json",
    )
    def portfolio_resource() -> str:
        return to_json(services.dashboard.portfolio_view(use_live_prices=False))

    @mcp.resource(
        WATCHLIST_URI,
        name="watchlist",
        title="Watchlist With Sizing",
        description="Watchlist entries with position sizing from the current risk settings.",
        mime_type="application/json",
    )
    def watchlist_resource() -> str:
        return to_json(services.dashboard.watchlist_view(use_live_prices=False))

    @mcp.resource(
        TRADES_URI,
        name="trades",
        title="Trade Journal Summary",
        description="Trade totals, per-date activity, cumulative fees and most traded tickers.",
        mime_type="application/json",
    )
    def trades_resource() -> str:
        return to_json(services.dashboard.trade_summary())
