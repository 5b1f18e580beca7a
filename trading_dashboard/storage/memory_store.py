"""Thread-safe in-memory record store for the dashboard."""

from __future__ import annotations

import itertools
from dataclasses import replace
from threading import Lock
from typing import Any, TypeVar

from trading_dashboard.storage.records import (
    AccountSettings,
    Alert,
    ChatMessage,
    PortfolioItem,
    Trade,
    WatchlistItem,
    utc_now,
)

R = TypeVar("R")


class MemoryStore:
    """Keyed record storage with create/read/update/delete per entity.

    Listings return copies ordered newest first, except chat history which
    reads oldest first. Ids are assigned per entity and never reused.
    """

    def __init__(self, default_settings: AccountSettings | None = None) -> None:
        self._lock = Lock()
        self._ids = {name: itertools.count(1) for name in ("watchlist", "portfolio", "trades", "alerts", "chat")}
        self._watchlist: dict[int, WatchlistItem] = {}
        self._portfolio: dict[int, PortfolioItem] = {}
        self._trades: dict[int, Trade] = {}
        self._alerts: dict[int, Alert] = {}
        self._chat: dict[int, ChatMessage] = {}
        self._default_settings = default_settings or AccountSettings()
        self._settings: AccountSettings | None = None

    def _next_id(self, entity: str) -> int:
        return next(self._ids[entity])

    @staticmethod
    def _newest_first(rows: dict[int, R]) -> list[R]:
        return [replace(row) for row in sorted(rows.values(), key=lambda r: (r.created_at, r.id), reverse=True)]

    @staticmethod
    def _update(rows: dict[int, R], record_id: int, changes: dict[str, Any]) -> R | None:
        current = rows.get(record_id)
        if current is None:
            return None
        updated = replace(current, **changes)
        rows[record_id] = updated
        return replace(updated)

    def list_watchlist(self) -> list[WatchlistItem]:
        with self._lock:
            return self._newest_first(self._watchlist)

    def add_watchlist_item(self, **fields: Any) -> WatchlistItem:
        with self._lock:
            item = WatchlistItem(id=self._next_id("watchlist"), created_at=utc_now(), **fields)
            self._watchlist[item.id] = item
            return replace(item)

    def update_watchlist_item(self, item_id: int, **changes: Any) -> WatchlistItem | None:
        with self._lock:
            return self._update(self._watchlist, item_id, changes)

    def delete_watchlist_item(self, item_id: int) -> None:
        with self._lock:
            self._watchlist.pop(item_id, None)

    def list_portfolio(self) -> list[PortfolioItem]:
        with self._lock:
            return self._newest_first(self._portfolio)

    def add_portfolio_item(self, **fields: Any) -> PortfolioItem:
        with self._lock:
            item = PortfolioItem(id=self._next_id("portfolio"), created_at=utc_now(), **fields)
            self._portfolio[item.id] = item
            return replace(item)

    def update_portfolio_item(self, item_id: int, **changes: Any) -> PortfolioItem | None:
        with self._lock:
            return self._update(self._portfolio, item_id, changes)

    def delete_portfolio_item(self, item_id: int) -> None:
        with self._lock:
            self._portfolio.pop(item_id, None)

    def list_trades(self) -> list[Trade]:
        with self._lock:
            return self._newest_first(self._trades)

    def add_trade(self, **fields: Any) -> Trade:
        with self._lock:
            trade = Trade(id=self._next_id("trades"), created_at=utc_now(), **fields)
            self._trades[trade.id] = trade
            return replace(trade)

    def delete_trade(self, trade_id: int) -> None:
        with self._lock:
            self._trades.pop(trade_id, None)

    def list_alerts(self) -> list[Alert]:
        with self._lock:
            return self._newest_first(self._alerts)

    def add_alert(self, **fields: Any) -> Alert:
        with self._lock:
            alert = Alert(id=self._next_id("alerts"), created_at=utc_now(), **fields)
            self._alerts[alert.id] = alert
            return replace(alert)

    def mark_alert_read(self, alert_id: int) -> None:
        with self._lock:
            self._update(self._alerts, alert_id, {"is_read": True})

    def mark_all_alerts_read(self) -> None:
        with self._lock:
            for alert_id in list(self._alerts):
                self._update(self._alerts, alert_id, {"is_read": True})

    def clear_alerts(self) -> None:
        with self._lock:
            self._alerts.clear()

    def list_chat_messages(self) -> list[ChatMessage]:
        with self._lock:
            return [replace(m) for m in sorted(self._chat.values(), key=lambda m: (m.created_at, m.id))]

    def add_chat_message(self, role: str, content: str) -> ChatMessage:
        with self._lock:
            message = ChatMessage(id=self._next_id("chat"), role=role, content=content, created_at=utc_now())
            self._chat[message.id] = message
            return replace(message)

    def clear_chat_messages(self) -> None:
        with self._lock:
            self._chat.clear()

    def _current_settings(self) -> AccountSettings:
        if self._settings is None:
            self._settings = replace(self._default_settings)
        return self._settings

    def get_settings(self) -> AccountSettings:
        with self._lock:
            return replace(self._current_settings())

    def update_settings(self, **changes: Any) -> AccountSettings:
        with self._lock:
            self._settings = replace(self._current_settings(), **changes)
            return replace(self._settings)
