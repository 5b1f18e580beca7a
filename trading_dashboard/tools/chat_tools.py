"""Strategy-assistant chat MCP tools."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mcp.server.fastmcp import FastMCP

from trading_dashboard.runtime.response import result_response, to_json
from trading_dashboard.tools.common import run_tool

if TYPE_CHECKING:
    from trading_dashboard.tools.registry import ToolServices


def register_chat_tools(mcp: FastMCP, services: ToolServices) -> None:
    @mcp.tool(description="Send a message to the strategy assistant; optionally include the portfolio context.")
    def send_chat_message(message: str, include_portfolio_analysis: bool = False) -> str:
        return run_tool(
            services,
            "send_chat_message",
            lambda: result_response(services.chat.send(message, include_portfolio_analysis)),
        )

    @mcp.tool(description="Return the chat history, oldest first.")
    def get_chat_history() -> str:
        return run_tool(services, "get_chat_history", lambda: to_json({"ok": True, "messages": services.chat.history()}))

    @mcp.tool(description="Delete the chat history.")
    def clear_chat_history() -> str:
        def _clear() -> str:
            services.chat.clear()
            return to_json({"ok": True, "success": True})

        return run_tool(services, "clear_chat_history", _clear)

    @mcp.tool(description="Report whether the AI assistant is configured.")
    def get_ai_status() -> str:
        return run_tool(services, "get_ai_status", lambda: to_json(services.chat.status()))
