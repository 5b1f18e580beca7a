"""Stored record types and their conversion into core inputs."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from trading_dashboard.portfolio.models import (
    DEFAULT_SECTOR,
    Position,
    RiskSettings,
    Signal,
    TradeRecord,
    TradeType,
    WatchlistEntry,
)

DEFAULT_TRADE_FEE = 6.95


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class WatchlistItem:
    id: int
    ticker: str
    entry_target: float
    stop_loss: float
    take_profit: float
    signal: Signal = "WATCH"
    sector: str = DEFAULT_SECTOR
    notes: str = ""
    created_at: datetime = field(default_factory=utc_now)


@dataclass
class PortfolioItem:
    id: int
    ticker: str
    shares: float
    avg_cost: float
    current_price: float
    sector: str = DEFAULT_SECTOR
    created_at: datetime = field(default_factory=utc_now)


@dataclass
class Trade:
    id: int
    type: TradeType
    ticker: str
    shares: float
    price: float
    date: str
    fees: float = DEFAULT_TRADE_FEE
    notes: str = ""
    created_at: datetime = field(default_factory=utc_now)


@dataclass
class Alert:
    id: int
    ticker: str
    signal_type: str
    message: str
    urgency: str = "medium"
    is_read: bool = False
    created_at: datetime = field(default_factory=utc_now)


@dataclass
class ChatMessage:
    id: int
    role: str
    content: str
    created_at: datetime = field(default_factory=utc_now)


@dataclass
class AccountSettings:
    id: int = 1
    account_size: float = 25000.0
    risk_percentage: float = 2.0
    flat_fee_per_trade: float = DEFAULT_TRADE_FEE
    email: str = ""
    analysis_interval: int = 60


def to_position(item: PortfolioItem) -> Position:
    return Position(
        ticker=item.ticker,
        shares=item.shares,
        avg_cost=item.avg_cost,
        current_price=item.current_price,
        sector=item.sector,
    )


def to_watchlist_entry(item: WatchlistItem) -> WatchlistEntry:
    return WatchlistEntry(
        ticker=item.ticker,
        entry_target=item.entry_target,
        stop_loss=item.stop_loss,
        take_profit=item.take_profit,
        signal=item.signal,
        sector=item.sector,
    )


def to_trade_record(item: Trade) -> TradeRecord:
    return TradeRecord(
        type=item.type,
        ticker=item.ticker,
        shares=item.shares,
        price=item.price,
        fees=item.fees,
        date=item.date,
        notes=item.notes,
    )


def to_risk_settings(settings: AccountSettings) -> RiskSettings:
    return RiskSettings(
        account_size=settings.account_size,
        risk_percentage=settings.risk_percentage,
        flat_fee_per_trade=settings.flat_fee_per_trade,
    )
