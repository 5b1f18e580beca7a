"""Portfolio-domain MCP tools."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mcp.server.fastmcp import FastMCP

from trading_dashboard.runtime.response import to_json
from trading_dashboard.tools.common import run_tool

if TYPE_CHECKING:
    from trading_dashboard.tools.registry import ToolServices


def register_portfolio_tools(mcp: FastMCP, services: ToolServices) -> None:
    @mcp.tool(
        description=(
            "Return holdings with market value, cost basis, unrealized P&L, portfolio totals, "
            "sector allocation, P&L ranking and holdings value versus cost."
        )
    )
    def get_portfolio(use_live_prices: bool = True) -> str:
        return run_tool(
            services,
            "get_portfolio",
            lambda: to_json(services.dashboard.portfolio_view(use_live_prices=use_live_prices)),
        )

    @mcp.tool(description="Add a holding. Fields: ticker, shares, avg_cost, current_price, sector.")
    def add_portfolio_item(item: dict[str, Any]) -> str:
        return run_tool(
            services,
            "add_portfolio_item",
            lambda: to_json(services.dashboard.add_portfolio_item(item)),
            ticker=str(item.get("ticker") or "") or None,
        )

    @mcp.tool(description="Update fields of a holding by id.")
    def update_portfolio_item(item_id: int, changes: dict[str, Any]) -> str:
        return run_tool(
            services,
            "update_portfolio_item",
            lambda: to_json(services.dashboard.update_portfolio_item(item_id, changes)),
        )

    @mcp.tool(description="Delete a holding by id.")
    def delete_portfolio_item(item_id: int) -> str:
        return run_tool(
            services,
            "delete_portfolio_item",
            lambda: to_json(services.dashboard.delete_portfolio_item(item_id)),
        )

    @mcp.tool(description="Load the demo watchlist, holdings, trades and alerts. Disabled in production.")
    def seed_demo_data() -> str:
        return run_tool(services, "seed_demo_data", lambda: to_json(services.dashboard.seed_demo_data()))
