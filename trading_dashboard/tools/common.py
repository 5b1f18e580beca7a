"""Shared tool-layer helpers."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Callable

from trading_dashboard.runtime.monitoring import log_tool_event
from trading_dashboard.runtime.response import to_json

if TYPE_CHECKING:
    from trading_dashboard.tools.registry import ToolServices


def validation_error(message: str, field: str = "request") -> str:
    return to_json(
        {
            "ok": False,
            "error": {
                "type": "validation_error",
                "errors": [{"field": field, "message": message, "code": "invalid_value"}],
            },
        }
    )


def run_tool(services: "ToolServices", tool: str, call: Callable[[], str], ticker: str | None = None) -> str:
    """Run one tool body with timing, metrics and ValueError-to-payload mapping."""
    started = time.perf_counter()
    success = True
    try:
        return call()
    except ValueError as error:
        success = False
        return validation_error(str(error))
    finally:
        latency_ms = (time.perf_counter() - started) * 1000.0
        warning = "slow_response" if latency_ms > 2000 else None
        log_tool_event(tool=tool, ticker=ticker, latency_ms=latency_ms, success=success, warning=warning)
        metrics = getattr(services, "metrics", None)
        if metrics is not None:
            metrics.record(tool, latency_ms=latency_ms, success=success)
