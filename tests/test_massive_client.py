from typing import get_args

import pytest

from trading_dashboard.providers import http, massive
from trading_dashboard.providers.http import ProviderError, fetch_json
from trading_dashboard.providers.massive import MassiveClient
from trading_dashboard.providers.models import Timespan
from trading_dashboard.services.base import VALID_TIMESPANS


def _capture(monkeypatch, payload: object) -> list[dict[str, object]]:
    calls: list[dict[str, object]] = []

    def _fake_fetch_json(url, provider, timeout_seconds=15.0, params=None, headers=None, max_retries=3):
        calls.append({"url": url, "provider": provider, "params": params})
        return payload

    monkeypatch.setattr(massive, "fetch_json", _fake_fetch_json)
    return calls


def test_get_snapshot_normalizes_fields(monkeypatch) -> None:
    calls = _capture(
        monkeypatch,
        {
            "status": "OK",
            "ticker": {
                "ticker": "RY.TO",
                "todaysChange": 1.2,
                "todaysChangePerc": 0.82,
                "updated": 1700000000000,
                "day": {"o": 146.0, "h": 148.5, "l": 145.7, "c": 147.9, "v": 120000},
                "prevDay": {"o": 145.0, "h": 147.0, "l": 144.2, "c": 146.7, "v": 98000},
                "lastTrade": {"p": 147.95, "s": 100},
            },
        },
    )
    snapshot = MassiveClient("key", base_url="https://example.test/v3/").get_snapshot("ry.to")

    assert calls[0]["url"] == "https://example.test/v3/snapshot/aggs/ticker/RY.TO"
    assert calls[0]["params"] == {"apiKey": "key"}
    assert snapshot.day.close == 147.9
    quote = snapshot.to_live_quote()
    assert quote.day_close == 147.9
    assert quote.last_trade_price == 147.95
    assert quote.previous_close == 146.7


def test_get_snapshot_missing_ticker_returns_none(monkeypatch) -> None:
    _capture(monkeypatch, {"status": "OK"})
    assert MassiveClient("key").get_snapshot("ZZZ") is None


def test_get_aggregates_builds_range_path(monkeypatch) -> None:
    calls = _capture(
        monkeypatch,
        {
            "adjusted": True,
            "results": [
                {"t": 1700000000000, "o": 1, "h": 2, "l": 0.5, "c": 1.5, "v": 10, "vw": 1.4, "n": 3},
                {"t": 1700086400000, "o": 1.5, "h": 2.5, "l": 1.0},
            ],
        },
    )
    series = MassiveClient("key").get_aggregates("shop.to", 1, "day", "2026-01-01", "2026-01-31", limit=50)

    assert calls[0]["url"].endswith("/aggs/ticker/SHOP.TO/range/1/day/2026-01-01/2026-01-31")
    assert calls[0]["params"] == {"adjusted": "true", "sort": "asc", "limit": "50", "apiKey": "key"}
    assert len(series.bars) == 1
    assert series.bars[0].transactions == 3


def test_get_previous_close(monkeypatch) -> None:
    calls = _capture(monkeypatch, {"results": [{"t": 1, "o": 1, "h": 1, "l": 1, "c": 52.1, "v": 5}]})
    bar = MassiveClient("key").get_previous_close("ENB.TO")
    assert calls[0]["url"].endswith("/aggs/ticker/ENB.TO/prev")
    assert bar.close == 52.1


def test_error_status_payload_raises(monkeypatch) -> None:
    _capture(monkeypatch, {"status": "ERROR", "error": "Unknown API Key"})
    with pytest.raises(ProviderError) as exc:
        MassiveClient("bad").get_snapshot("RY.TO")
    assert exc.value.code == "UPSTREAM"
    assert "Unknown API Key" in exc.value.message


class _Response:
    def __init__(self, status_code: int, text: str) -> None:
        self.status_code = status_code
        self.text = text
        self.ok = 200 <= status_code < 300


def test_fetch_json_retries_transient_status(monkeypatch) -> None:
    responses = [_Response(503, "busy"), _Response(200, '{"status": "OK"}')]
    monkeypatch.setattr(http._SESSION, "get", lambda *args, **kwargs: responses.pop(0))
    monkeypatch.setattr(http, "_backoff", lambda attempt: None)
    assert fetch_json("https://example.test", "massive") == {"status": "OK"}


def test_fetch_json_maps_status_and_truncates_body(monkeypatch) -> None:
    monkeypatch.setattr(http._SESSION, "get", lambda *args, **kwargs: _Response(401, "x" * 500))
    with pytest.raises(ProviderError) as exc:
        fetch_json("https://example.test", "massive")
    assert exc.value.code == "AUTH"
    assert exc.value.status == 401
    assert exc.value.message == f"massive API error (401): {'x' * 300}"


def test_timespan_choices_match_service_validation() -> None:
    assert set(get_args(Timespan)) == VALID_TIMESPANS
