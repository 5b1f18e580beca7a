"""Application entrypoint for the trading dashboard MCP server."""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import asdict

from mcp.server.fastmcp import FastMCP
from starlette.responses import JSONResponse, Response

from trading_dashboard.config.settings import Settings, get_settings
from trading_dashboard.prompts.strategy_prompts import register_strategy_prompts
from trading_dashboard.providers.anthropic_client import AnthropicClient
from trading_dashboard.providers.massive import MassiveClient
from trading_dashboard.resources.dashboard_resources import register_dashboard_resources
from trading_dashboard.runtime.monitoring import ServerMetrics
from trading_dashboard.services.base import ServiceContext
from trading_dashboard.storage.memory_store import MemoryStore
from trading_dashboard.storage.records import AccountSettings
from trading_dashboard.tools.registry import ToolServices, build_tool_services, register_all_tools

LOGGER = logging.getLogger(__name__)


def resolve_transport_mode(configured_mode: str) -> str:
    if os.getenv("RENDER") and configured_mode == "stdio":
        return "http"
    if configured_mode in {"stdio", "http"}:
        return configured_mode
    if os.getenv("RENDER") or os.getenv("PORT"):
        return "http"
    return "stdio"


def resolve_http_transport(configured_transport: str) -> str:
    if configured_transport in {"sse", "streamable"}:
        return configured_transport
    return "sse"


def build_services(settings: Settings, metrics: ServerMetrics | None = None) -> ToolServices:
    massive_client = (
        MassiveClient(settings.massive_api_key, settings.request_timeout_seconds, settings.massive_base_url)
        if settings.massive_api_key
        else None
    )
    anthropic_client = (
        AnthropicClient(settings.claude_api_key, settings.claude_model, settings.request_timeout_seconds)
        if settings.claude_api_key
        else None
    )
    store = MemoryStore(
        default_settings=AccountSettings(
            account_size=settings.default_account_size,
            risk_percentage=settings.default_risk_percentage,
            flat_fee_per_trade=settings.commission_per_trade,
        )
    )
    ctx = ServiceContext(providers={"massive": massive_client, "anthropic": anthropic_client}, store=store)
    return build_tool_services(
        ctx,
        commission=settings.commission_per_trade,
        chat_history_limit=settings.chat_history_limit,
        ticker_volume_limit=settings.ticker_volume_limit,
        allow_seed=not settings.is_production,
        metrics=metrics,
    )


def create_server(settings: Settings, services: ToolServices) -> FastMCP:
    mcp = FastMCP(
        name=settings.app_name,
        host=settings.host,
        port=settings.port,
        streamable_http_path=settings.mcp_path,
    )
    register_all_tools(mcp, services)
    register_strategy_prompts(mcp, services)
    register_dashboard_resources(mcp, services)
    return mcp


async def run() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    settings = get_settings()
    server_metrics = ServerMetrics()
    services = build_services(settings, server_metrics)
    mcp = create_server(settings, services)
    resolved_mode = resolve_transport_mode(settings.transport_mode)
    resolved_http_transport = resolve_http_transport(settings.http_transport)

    @mcp.custom_route(settings.health_path, methods=["GET"])
    async def health_check(_: object) -> Response:
        tools = await mcp.list_tools()
        snapshot = server_metrics.snapshot(
            {
                "massive": services.market.configured,
                "anthropic": services.chat.status()["connected"],
            }
        )
        return JSONResponse(
            {
                "status": "ok",
                "service": settings.app_name,
                "version": settings.app_version,
                "mode": resolved_mode,
                "tool_count": len(tools),
                "metrics": asdict(snapshot),
            }
        )

    if not services.market.configured:
        LOGGER.warning("MASSIVE_API_KEY not set: live prices and market tools are unavailable.")
    if not services.chat.status()["connected"]:
        LOGGER.warning("CLAUDE_API_KEY not set: the strategy assistant runs in standby mode.")
    if resolved_mode == "stdio":
        await mcp.run_stdio_async()
    elif resolved_http_transport == "streamable":
        await mcp.run_streamable_http_async()
    else:
        await mcp.run_sse_async()


def main() -> None:
    asyncio.run(run())


if __name__ == "__main__":
    main()
