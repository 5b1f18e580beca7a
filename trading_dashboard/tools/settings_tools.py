"""Account settings MCP tools."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mcp.server.fastmcp import FastMCP

from trading_dashboard.runtime.response import to_json
from trading_dashboard.tools.common import run_tool

if TYPE_CHECKING:
    from trading_dashboard.tools.registry import ToolServices


def register_settings_tools(mcp: FastMCP, services: ToolServices) -> None:
    @mcp.tool(description="Get account size, risk percentage, flat fee per trade and notification settings.")
    def get_account_settings() -> str:
        return run_tool(
            services,
            "get_account_settings",
            lambda: to_json({"ok": True, "settings": services.store.get_settings()}),
        )

    @mcp.tool(
        description=(
            "Update account settings. Fields: account_size, risk_percentage, flat_fee_per_trade, "
            "email, analysis_interval."
        )
    )
    def update_account_settings(changes: dict[str, Any]) -> str:
        return run_tool(
            services,
            "update_account_settings",
            lambda: to_json(services.dashboard.update_settings(changes)),
        )
