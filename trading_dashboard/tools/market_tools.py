"""Market-data MCP tools."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mcp.server.fastmcp import FastMCP

from trading_dashboard.runtime.response import result_response
from trading_dashboard.tools.common import run_tool

if TYPE_CHECKING:
    from trading_dashboard.tools.registry import ToolServices


def register_market_tools(mcp: FastMCP, services: ToolServices) -> None:
    @mcp.tool(description="Get the latest snapshot (day bar, previous day, last trade) for a ticker.")
    def get_snapshot(ticker: str) -> str:
        return run_tool(
            services,
            "get_snapshot",
            lambda: result_response(services.market.get_snapshot(ticker)),
            ticker=ticker,
        )

    @mcp.tool(description="Get price change and percent change versus the previous close for a ticker.")
    def get_quote_change(ticker: str) -> str:
        return run_tool(
            services,
            "get_quote_change",
            lambda: result_response(services.market.get_quote_change(ticker)),
            ticker=ticker,
        )

    @mcp.tool(description="Get aggregate bars for charting. Dates are YYYY-MM-DD; timespan is minute..year.")
    def get_chart(ticker: str, from_date: str, to_date: str, multiplier: int = 1, timespan: str = "day") -> str:
        return run_tool(
            services,
            "get_chart",
            lambda: result_response(
                services.market.get_chart(ticker, from_date, to_date, multiplier=multiplier, timespan=timespan)
            ),
            ticker=ticker,
        )

    @mcp.tool(description="Get the previous trading day's bar for a ticker.")
    def get_previous_close(ticker: str) -> str:
        return run_tool(
            services,
            "get_previous_close",
            lambda: result_response(services.market.get_previous_close(ticker)),
            ticker=ticker,
        )
