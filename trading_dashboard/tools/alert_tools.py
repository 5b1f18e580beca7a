"""Alert MCP tools."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mcp.server.fastmcp import FastMCP

from trading_dashboard.runtime.response import to_json
from trading_dashboard.tools.common import run_tool

if TYPE_CHECKING:
    from trading_dashboard.tools.registry import ToolServices


def register_alert_tools(mcp: FastMCP, services: ToolServices) -> None:
    @mcp.tool(description="List alerts, newest first.")
    def list_alerts(unread_only: bool = False) -> str:
        def _list() -> str:
            alerts = services.store.list_alerts()
            if unread_only:
                alerts = [alert for alert in alerts if not alert.is_read]
            return to_json({"ok": True, "alerts": alerts})

        return run_tool(services, "list_alerts", _list)

    @mcp.tool(description="Create an alert. Fields: ticker, signal_type, urgency (high/medium/low), message.")
    def add_alert(alert: dict[str, Any]) -> str:
        return run_tool(services, "add_alert", lambda: to_json(services.dashboard.add_alert(alert)))

    @mcp.tool(description="Mark one alert as read.")
    def mark_alert_read(alert_id: int) -> str:
        def _mark() -> str:
            services.store.mark_alert_read(alert_id)
            return to_json({"ok": True, "success": True})

        return run_tool(services, "mark_alert_read", _mark)

    @mcp.tool(description="Mark every alert as read.")
    def mark_all_alerts_read() -> str:
        def _mark_all() -> str:
            services.store.mark_all_alerts_read()
            return to_json({"ok": True, "success": True})

        return run_tool(services, "mark_all_alerts_read", _mark_all)

    @mcp.tool(description="Delete all alerts.")
    def clear_alerts() -> str:
        def _clear() -> str:
            services.store.clear_alerts()
            return to_json({"ok": True, "success": True})

        return run_tool(services, "clear_alerts", _clear)
