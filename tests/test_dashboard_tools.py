import asyncio
import json

from mcp.server.fastmcp import FastMCP

from trading_dashboard.services.base import ServiceContext
from trading_dashboard.storage.memory_store import MemoryStore
from trading_dashboard.tools.registry import ToolServices, build_tool_services, register_all_tools


def _server() -> tuple[FastMCP, ToolServices]:
    services = build_tool_services(ServiceContext(providers={}, store=MemoryStore()))
    mcp = FastMCP(name="dashboard-tools-test")
    register_all_tools(mcp, services)
    return mcp, services


def _call(mcp: FastMCP, name: str, arguments: dict[str, object]) -> dict[str, object]:
    _, metadata = asyncio.run(mcp.call_tool(name, arguments))
    return json.loads(str(metadata.get("result") or ""))


def test_tools_are_registered() -> None:
    mcp, _ = _server()
    names = {tool.name for tool in asyncio.run(mcp.list_tools())}
    assert {
        "list_watchlist",
        "add_watchlist_item",
        "get_portfolio",
        "seed_demo_data",
        "add_trade",
        "get_trade_summary",
        "list_alerts",
        "update_account_settings",
        "get_snapshot",
        "get_chart",
        "send_chat_message",
        "get_ai_status",
    } <= names


def test_add_and_list_watchlist_item() -> None:
    mcp, services = _server()
    added = _call(
        mcp,
        "add_watchlist_item",
        {"item": {"ticker": "ry.to", "entry_target": 145.5, "stop_loss": 140, "take_profit": 158, "signal": "BUY"}},
    )
    assert added["ok"] is True
    assert added["item"]["ticker"] == "RY.TO"
    assert isinstance(added["item"]["created_at"], str)

    listed = _call(mcp, "list_watchlist", {})
    assert listed["items"][0]["sizing"]["shares"] == 90
    assert services.metrics.total_requests == 2


def test_add_trade_validation_error_payload() -> None:
    mcp, _ = _server()
    payload = _call(mcp, "add_trade", {"trade": {"type": "BUY", "ticker": "RY.TO", "shares": 5}})
    assert payload["ok"] is False
    assert payload["error"]["type"] == "validation_error"
    assert {error["field"] for error in payload["error"]["errors"]} == {"price", "date"}


def test_seed_and_summaries() -> None:
    mcp, _ = _server()
    assert _call(mcp, "seed_demo_data", {})["message"] == "Seed data created"
    portfolio = _call(mcp, "get_portfolio", {"use_live_prices": True})
    assert len(portfolio["positions"]) == 4
    summary = _call(mcp, "get_trade_summary", {})
    assert summary["totals"]["trade_count"] == 5

    alerts = _call(mcp, "list_alerts", {"unread_only": True})
    assert len(alerts["alerts"]) == 3
    _call(mcp, "mark_all_alerts_read", {})
    assert _call(mcp, "list_alerts", {"unread_only": True})["alerts"] == []


def test_settings_update_and_read() -> None:
    mcp, _ = _server()
    updated = _call(mcp, "update_account_settings", {"changes": {"risk_percentage": 1}})
    assert updated["settings"]["risk_percentage"] == 1.0
    assert _call(mcp, "get_account_settings", {})["settings"]["account_size"] == 25000.0


def test_market_tools_without_key_report_unavailable() -> None:
    mcp, _ = _server()
    payload = _call(mcp, "get_snapshot", {"ticker": "RY.TO"})
    assert payload["ok"] is False
    assert payload["error"]["type"] == "DATA_UNAVAILABLE"


def test_chat_tools_in_standby() -> None:
    mcp, _ = _server()
    assert _call(mcp, "get_ai_status", {}) == {"connected": False}
    reply = _call(mcp, "send_chat_message", {"message": "Hi"})
    assert reply["ok"] is True
    assert reply["source"] == "standby"
    history = _call(mcp, "get_chat_history", {})
    assert [m["role"] for m in history["messages"]] == ["user", "assistant"]
