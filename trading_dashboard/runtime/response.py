"""JSON shaping helpers for dashboard tools."""

from __future__ import annotations

import json
import time
from dataclasses import asdict, is_dataclass
from datetime import datetime
from typing import Any

from trading_dashboard.services.base import ErrorEnvelope, ServiceResult


def _convert_data(data: Any) -> Any:
    if is_dataclass(data) and not isinstance(data, type):
        return _convert_data(asdict(data))
    if isinstance(data, datetime):
        return data.isoformat()
    if isinstance(data, (list, tuple)):
        return [_convert_data(item) for item in data]
    if isinstance(data, dict):
        return {key: _convert_data(value) for key, value in data.items()}
    return data


def to_json(payload: Any) -> str:
    return json.dumps(_convert_data(payload), ensure_ascii=True)


def success_response(result: ServiceResult[Any]) -> str:
    payload: dict[str, Any] = {"ok": True, "data": _convert_data(result.data)}
    if result.source:
        payload["source"] = result.source
    if result.warning:
        payload["warning"] = result.warning
    return json.dumps(payload, ensure_ascii=True)


def error_response(error: ErrorEnvelope | None, default_message: str = "No data returned.") -> str:
    envelope = error or ErrorEnvelope(code="DATA_UNAVAILABLE", message=default_message, retriable=False)
    return json.dumps(
        {
            "ok": False,
            "error": {
                "type": envelope.code,
                "message": envelope.message,
                "retriable": envelope.retriable,
            },
            "timestamp": int(time.time()),
        },
        ensure_ascii=True,
    )


def result_response(result: ServiceResult[Any], default_message: str = "No data returned.") -> str:
    if result.data is None:
        return error_response(result.error, default_message)
    return success_response(result)
