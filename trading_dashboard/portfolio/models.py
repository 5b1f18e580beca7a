"""Typed inputs and derived values for the sizing and aggregation core."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Signal = Literal["BUY", "SELL", "HOLD", "WATCH"]
TradeType = Literal["BUY", "SELL"]

DEFAULT_SECTOR = "Other"


@dataclass(frozen=True)
class Position:
    ticker: str
    shares: float
    avg_cost: float
    current_price: float
    sector: str | None = DEFAULT_SECTOR


@dataclass(frozen=True)
class WatchlistEntry:
    ticker: str
    entry_target: float
    stop_loss: float
    take_profit: float
    signal: Signal = "WATCH"
    sector: str | None = DEFAULT_SECTOR


@dataclass(frozen=True)
class TradeRecord:
    type: TradeType
    ticker: str
    shares: float
    price: float
    fees: float
    date: str
    notes: str = ""


@dataclass(frozen=True)
class RiskSettings:
    account_size: float
    risk_percentage: float
    flat_fee_per_trade: float = 6.95


@dataclass(frozen=True)
class PositionSizing:
    shares: int
    risk_amount: float
    risk_per_share: float
    total_cost: float
    potential_profit: float
    risk_reward_ratio: float
    # take_profit below entry; figures above are left as computed
    inverted_target: bool = False


@dataclass(frozen=True)
class PositionView:
    ticker: str
    shares: float
    avg_cost: float
    price: float
    sector: str
    market_value: float
    cost_basis: float
    unrealized_pnl: float
    return_pct: float
    live: bool = False


@dataclass(frozen=True)
class PortfolioTotals:
    total_value: float
    total_cost: float
    total_pnl: float
    total_return_pct: float


@dataclass(frozen=True)
class DateBucket:
    date: str
    buys: float
    sells: float
    fees: float


@dataclass(frozen=True)
class FeePoint:
    date: str
    fees: float


@dataclass(frozen=True)
class CategoryTotal:
    category: str
    value: float


@dataclass(frozen=True)
class PnlRank:
    ticker: str
    pnl: float
    return_pct: float


@dataclass(frozen=True)
class HoldingValue:
    ticker: str
    value: float
    cost: float


@dataclass(frozen=True)
class TradeTotals:
    total_bought: float
    total_sold: float
    total_fees: float
    trade_count: int


@dataclass
class ValidationIssue:
    field: str
    message: str
    code: str = "invalid_value"
