"""Dashboard orchestration: validated CRUD plus derived views over one storage snapshot."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Callable

from trading_dashboard.portfolio.aggregation import (
    calculate_trade_totals,
    cumulative_fees,
    trades_by_date,
    volume_by_ticker,
)
from trading_dashboard.portfolio.models import ValidationIssue
from trading_dashboard.portfolio.validation import (
    validate_alert,
    validate_portfolio,
    validate_settings,
    validate_trade,
    validate_watchlist,
)
from trading_dashboard.portfolio.views import build_portfolio_view, build_watchlist_view
from trading_dashboard.providers.models import LiveQuote
from trading_dashboard.services.base import ServiceContext
from trading_dashboard.storage.records import (
    DEFAULT_TRADE_FEE,
    to_position,
    to_risk_settings,
    to_trade_record,
    to_watchlist_entry,
)

LOGGER = logging.getLogger(__name__)
PriceLookup = Callable[[str], "LiveQuote | None"]

DEMO_WATCHLIST = [
    {"ticker": "RY.TO", "entry_target": 145.50, "stop_loss": 140.00, "take_profit": 158.00, "signal": "BUY", "sector": "Financials", "notes": "Strong earnings momentum"},
    {"ticker": "SHOP.TO", "entry_target": 105.00, "stop_loss": 95.00, "take_profit": 125.00, "signal": "WATCH", "sector": "Technology", "notes": "Waiting for pullback to support"},
    {"ticker": "CNR.TO", "entry_target": 165.00, "stop_loss": 158.00, "take_profit": 180.00, "signal": "HOLD", "sector": "Industrials", "notes": "Rail volume increasing"},
    {"ticker": "ENB.TO", "entry_target": 52.00, "stop_loss": 49.50, "take_profit": 57.00, "signal": "BUY", "sector": "Energy", "notes": "Dividend yield attractive"},
    {"ticker": "TD.TO", "entry_target": 82.00, "stop_loss": 78.00, "take_profit": 90.00, "signal": "SELL", "sector": "Financials", "notes": "Approaching resistance"},
]
DEMO_PORTFOLIO = [
    {"ticker": "RY.TO", "shares": 50, "avg_cost": 142.30, "current_price": 147.85, "sector": "Financials"},
    {"ticker": "CNR.TO", "shares": 30, "avg_cost": 160.50, "current_price": 168.20, "sector": "Industrials"},
    {"ticker": "BCE.TO", "shares": 100, "avg_cost": 48.75, "current_price": 46.90, "sector": "Telecom"},
    {"ticker": "BMO.TO", "shares": 40, "avg_cost": 125.00, "current_price": 131.40, "sector": "Financials"},
]
DEMO_TRADES = [
    {"type": "BUY", "ticker": "RY.TO", "shares": 50, "price": 142.30, "fees": 6.95, "date": "2025-12-15", "notes": "Initial position on breakout"},
    {"type": "BUY", "ticker": "CNR.TO", "shares": 30, "price": 160.50, "fees": 6.95, "date": "2025-12-20", "notes": "Dip buy opportunity"},
    {"type": "SELL", "ticker": "SU.TO", "shares": 75, "price": 55.20, "fees": 6.95, "date": "2026-01-08", "notes": "Hit take profit target"},
    {"type": "BUY", "ticker": "BCE.TO", "shares": 100, "price": 48.75, "fees": 6.95, "date": "2026-01-15", "notes": "Dividend play"},
    {"type": "BUY", "ticker": "BMO.TO", "shares": 40, "price": 125.00, "fees": 6.95, "date": "2026-01-28", "notes": "Banking sector rotation"},
]
DEMO_ALERTS = [
    {"ticker": "RY.TO", "signal_type": "BUY", "urgency": "high", "message": "Royal Bank breaking above 200-day MA with strong volume"},
    {"ticker": "SHOP.TO", "signal_type": "WATCH", "urgency": "medium", "message": "Shopify approaching key support level at $100"},
    {"ticker": "ENB.TO", "signal_type": "BUY", "urgency": "low", "message": "Enbridge dividend yield now above 7%, historically attractive entry"},
]


def _json_validation_error(issues: list[ValidationIssue]) -> dict[str, Any]:
    return {
        "ok": False,
        "error": {
            "type": "validation_error",
            "errors": [{"field": issue.field, "message": issue.message, "code": issue.code} for issue in issues],
        },
    }


def _not_found(entity: str) -> dict[str, Any]:
    return {"ok": False, "error": {"type": "not_found", "message": f"{entity} not found"}}


class DashboardService:
    def __init__(
        self,
        ctx: ServiceContext,
        price_lookup: PriceLookup | None = None,
        default_fee: float = DEFAULT_TRADE_FEE,
        ticker_volume_limit: int = 10,
        allow_seed: bool = True,
    ) -> None:
        self.ctx = ctx
        self.price_lookup = price_lookup
        self.default_fee = default_fee
        self.ticker_volume_limit = ticker_volume_limit
        self.allow_seed = allow_seed

    @property
    def store(self):
        return self.ctx.store

    def _quote(self, ticker: str) -> LiveQuote | None:
        return self.price_lookup(ticker) if self.price_lookup else None

    # Watchlist

    def add_watchlist_item(self, payload: Any) -> dict[str, Any]:
        fields, issues = validate_watchlist(payload)
        if issues:
            return _json_validation_error(issues)
        item = self.store.add_watchlist_item(**fields)
        LOGGER.info("watchlist item added: id=%s ticker=%s", item.id, item.ticker)
        return {"ok": True, "item": asdict(item)}

    def update_watchlist_item(self, item_id: int, payload: Any) -> dict[str, Any]:
        fields, issues = validate_watchlist(payload, partial=True)
        if issues:
            return _json_validation_error(issues)
        item = self.store.update_watchlist_item(item_id, **fields)
        if item is None:
            return _not_found("Watchlist item")
        return {"ok": True, "item": asdict(item)}

    def delete_watchlist_item(self, item_id: int) -> dict[str, Any]:
        self.store.delete_watchlist_item(item_id)
        return {"ok": True, "success": True}

    def watchlist_view(self, use_live_prices: bool = True) -> dict[str, Any]:
        risk = to_risk_settings(self.store.get_settings())
        rows = []
        for item in self.store.list_watchlist():
            quote = self._quote(item.ticker) if use_live_prices else None
            view = build_watchlist_view(to_watchlist_entry(item), risk, quote)
            rows.append(
                {
                    "item": asdict(item),
                    "sizing": asdict(view.sizing) if view.sizing else None,
                    "live_price": view.live_price,
                    "message": view.message,
                    "warnings": view.warnings,
                }
            )
        return {"ok": True, "risk_settings": asdict(risk), "items": rows}

    # Portfolio

    def add_portfolio_item(self, payload: Any) -> dict[str, Any]:
        fields, issues = validate_portfolio(payload)
        if issues:
            return _json_validation_error(issues)
        item = self.store.add_portfolio_item(**fields)
        LOGGER.info("portfolio item added: id=%s ticker=%s", item.id, item.ticker)
        return {"ok": True, "item": asdict(item)}

    def update_portfolio_item(self, item_id: int, payload: Any) -> dict[str, Any]:
        fields, issues = validate_portfolio(payload, partial=True)
        if issues:
            return _json_validation_error(issues)
        item = self.store.update_portfolio_item(item_id, **fields)
        if item is None:
            return _not_found("Portfolio item")
        return {"ok": True, "item": asdict(item)}

    def delete_portfolio_item(self, item_id: int) -> dict[str, Any]:
        self.store.delete_portfolio_item(item_id)
        return {"ok": True, "success": True}

    def portfolio_view(self, use_live_prices: bool = True) -> dict[str, Any]:
        items = self.store.list_portfolio()
        lookup = self._quote if use_live_prices and self.price_lookup else None
        view = build_portfolio_view([to_position(item) for item in items], lookup)
        return {
            "ok": True,
            "positions": [
                {"id": item.id, **asdict(position)} for item, position in zip(items, view.positions)
            ],
            "totals": asdict(view.totals),
            "sector_allocation": [asdict(row) for row in view.sectors],
            "pnl_ranking": [asdict(row) for row in view.pnl_ranking],
            "holdings_value": [asdict(row) for row in view.holdings_value],
        }

    # Trades

    def add_trade(self, payload: Any) -> dict[str, Any]:
        fields, issues = validate_trade(payload)
        if issues:
            return _json_validation_error(issues)
        fields.setdefault("fees", self.default_fee)
        trade = self.store.add_trade(**fields)
        LOGGER.info("trade logged: id=%s type=%s ticker=%s", trade.id, trade.type, trade.ticker)
        return {"ok": True, "trade": asdict(trade)}

    def delete_trade(self, trade_id: int) -> dict[str, Any]:
        self.store.delete_trade(trade_id)
        return {"ok": True, "success": True}

    def trade_summary(self) -> dict[str, Any]:
        records = [to_trade_record(trade) for trade in self.store.list_trades()]
        buckets = trades_by_date(records)
        return {
            "ok": True,
            "totals": asdict(calculate_trade_totals(records)),
            "by_date": [asdict(bucket) for bucket in buckets],
            "cumulative_fees": [asdict(point) for point in cumulative_fees(buckets)],
            "top_tickers": [asdict(row) for row in volume_by_ticker(records, self.ticker_volume_limit)],
        }

    # Alerts

    def add_alert(self, payload: Any) -> dict[str, Any]:
        fields, issues = validate_alert(payload)
        if issues:
            return _json_validation_error(issues)
        return {"ok": True, "alert": asdict(self.store.add_alert(**fields))}

    # Settings

    def update_settings(self, payload: Any) -> dict[str, Any]:
        fields, issues = validate_settings(payload)
        if issues:
            return _json_validation_error(issues)
        return {"ok": True, "settings": asdict(self.store.update_settings(**fields))}

    # Demo data

    def seed_demo_data(self) -> dict[str, Any]:
        if not self.allow_seed:
            return {"ok": False, "error": {"type": "forbidden", "message": "Seed endpoint disabled in production"}}
        if self.store.list_watchlist():
            return {"ok": True, "message": "Data already seeded"}
        for row in DEMO_WATCHLIST:
            self.store.add_watchlist_item(**row)
        for row in DEMO_PORTFOLIO:
            self.store.add_portfolio_item(**row)
        for row in DEMO_TRADES:
            self.store.add_trade(**row)
        for row in DEMO_ALERTS:
            self.store.add_alert(**row)
        LOGGER.info("demo data seeded")
        return {"ok": True, "message": "Seed data created"}
