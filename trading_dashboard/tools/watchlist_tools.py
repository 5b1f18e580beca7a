"""Watchlist MCP tools."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mcp.server.fastmcp import FastMCP

from trading_dashboard.runtime.response import to_json
from trading_dashboard.tools.common import run_tool

if TYPE_CHECKING:
    from trading_dashboard.tools.registry import ToolServices


def register_watchlist_tools(mcp: FastMCP, services: ToolServices) -> None:
    @mcp.tool(description="List watchlist entries with position sizing from the current risk settings.")
    def list_watchlist(use_live_prices: bool = True) -> str:
        return run_tool(
            services,
            "list_watchlist",
            lambda: to_json(services.dashboard.watchlist_view(use_live_prices=use_live_prices)),
        )

    @mcp.tool(
        description=(
            "Add a watchlist entry. Fields: ticker, entry_target, stop_loss, take_profit, "
            "signal (BUY/SELL/HOLD/WATCH), sector, notes."
        )
    )
    def add_watchlist_item(item: dict[str, Any]) -> str:
        return run_tool(
            services,
            "add_watchlist_item",
            lambda: to_json(services.dashboard.add_watchlist_item(item)),
            ticker=str(item.get("ticker") or "") or None,
        )

    @mcp.tool(description="Update fields of a watchlist entry by id.")
    def update_watchlist_item(item_id: int, changes: dict[str, Any]) -> str:
        return run_tool(
            services,
            "update_watchlist_item",
            lambda: to_json(services.dashboard.update_watchlist_item(item_id, changes)),
        )

    @mcp.tool(description="Delete a watchlist entry by id.")
    def delete_watchlist_item(item_id: int) -> str:
        return run_tool(
            services,
            "delete_watchlist_item",
            lambda: to_json(services.dashboard.delete_watchlist_item(item_id)),
        )
