"""Massive REST adapter (snapshots, aggregate bars, previous close)."""

from __future__ import annotations

from typing import Any

from trading_dashboard.providers.http import ProviderError, fetch_json
from trading_dashboard.providers.models import AggregateBar, AggregatesSeries, TickerSnapshot, Timespan

MASSIVE_BASE_URL = "https://api.massive.com/v3"


def _to_float(value: object) -> float | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _to_int(value: object) -> int | None:
    number = _to_float(value)
    return int(number) if number is not None else None


def _parse_bar(raw: object) -> AggregateBar | None:
    if not isinstance(raw, dict):
        return None
    close = _to_float(raw.get("c"))
    if close is None:
        return None
    return AggregateBar(
        timestamp_ms=_to_int(raw.get("t")) or 0,
        open=_to_float(raw.get("o")) or 0.0,
        high=_to_float(raw.get("h")) or 0.0,
        low=_to_float(raw.get("l")) or 0.0,
        close=close,
        volume=_to_float(raw.get("v")) or 0.0,
        vwap=_to_float(raw.get("vw")),
        transactions=_to_int(raw.get("n")),
    )


def _parse_bars(data: dict[str, Any]) -> list[AggregateBar]:
    results = data.get("results")
    if not isinstance(results, list):
        return []
    return [bar for bar in (_parse_bar(item) for item in results) if bar is not None]


class MassiveClient:
    def __init__(self, api_key: str, timeout_seconds: float = 15.0, base_url: str = MASSIVE_BASE_URL) -> None:
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self.base_url = base_url.rstrip("/")

    def _request(self, path: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        query = {key: value for key, value in (params or {}).items() if value not in (None, "")}
        query["apiKey"] = self.api_key
        data = fetch_json(
            f"{self.base_url}{path}",
            provider="massive",
            timeout_seconds=self.timeout_seconds,
            params=query,
        )
        if not isinstance(data, dict):
            raise ProviderError("massive", "BAD_RESPONSE", "massive returned an unexpected payload shape.")
        if str(data.get("status", "")).upper() == "ERROR":
            message = str(data.get("error") or data.get("message") or "massive upstream error.")
            raise ProviderError("massive", "UPSTREAM", message)
        return data

    def get_snapshot(self, ticker: str) -> TickerSnapshot | None:
        symbol = ticker.upper()
        data = self._request(f"/snapshot/aggs/ticker/{symbol}")
        raw = data.get("ticker")
        if not isinstance(raw, dict):
            return None
        last_trade = raw.get("lastTrade") if isinstance(raw.get("lastTrade"), dict) else {}
        return TickerSnapshot(
            ticker=str(raw.get("ticker") or symbol),
            todays_change=_to_float(raw.get("todaysChange")) or 0.0,
            todays_change_percent=_to_float(raw.get("todaysChangePerc")) or 0.0,
            updated=_to_int(raw.get("updated")),
            day=_parse_bar(raw.get("day")),
            prev_day=_parse_bar(raw.get("prevDay")),
            last_trade_price=_to_float(last_trade.get("p")),
            last_trade_size=_to_float(last_trade.get("s")),
        )

    def get_aggregates(
        self,
        ticker: str,
        multiplier: int,
        timespan: Timespan,
        from_date: str,
        to_date: str,
        adjusted: bool = True,
        sort: str = "asc",
        limit: int | None = None,
    ) -> AggregatesSeries:
        symbol = ticker.upper()
        params = {"adjusted": str(adjusted).lower(), "sort": sort}
        if limit:
            params["limit"] = str(limit)
        data = self._request(f"/aggs/ticker/{symbol}/range/{multiplier}/{timespan}/{from_date}/{to_date}", params)
        return AggregatesSeries(ticker=symbol, adjusted=bool(data.get("adjusted", adjusted)), bars=_parse_bars(data))

    def get_previous_close(self, ticker: str) -> AggregateBar | None:
        symbol = ticker.upper()
        bars = _parse_bars(self._request(f"/aggs/ticker/{symbol}/prev"))
        return bars[0] if bars else None
