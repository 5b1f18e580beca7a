"""Trade journal MCP tools."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mcp.server.fastmcp import FastMCP

from trading_dashboard.runtime.response import to_json
from trading_dashboard.tools.common import run_tool

if TYPE_CHECKING:
    from trading_dashboard.tools.registry import ToolServices


def register_trade_tools(mcp: FastMCP, services: ToolServices) -> None:
    @mcp.tool(description="List logged trades, newest first.")
    def list_trades() -> str:
        return run_tool(
            services,
            "list_trades",
            lambda: to_json({"ok": True, "trades": services.store.list_trades()}),
        )

    @mcp.tool(description="Log a trade. Fields: type (BUY/SELL), ticker, shares, price, fees, date (YYYY-MM-DD), notes.")
    def add_trade(trade: dict[str, Any]) -> str:
        return run_tool(
            services,
            "add_trade",
            lambda: to_json(services.dashboard.add_trade(trade)),
            ticker=str(trade.get("ticker") or "") or None,
        )

    @mcp.tool(description="Delete a logged trade by id.")
    def delete_trade(trade_id: int) -> str:
        return run_tool(services, "delete_trade", lambda: to_json(services.dashboard.delete_trade(trade_id)))

    @mcp.tool(description="Summarize trades: totals, per-date buy/sell volume, cumulative fees and top tickers.")
    def get_trade_summary() -> str:
        return run_tool(services, "get_trade_summary", lambda: to_json(services.dashboard.trade_summary()))
