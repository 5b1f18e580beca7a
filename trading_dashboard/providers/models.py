"""Normalized market-data models shared across providers and services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ProviderName = Literal["massive", "anthropic"]
Timespan = Literal["minute", "hour", "day", "week", "month", "quarter", "year"]


@dataclass
class AggregateBar:
    timestamp_ms: int
    open: float
    high: float
    low: float
    close: float
    volume: float
    vwap: float | None = None
    transactions: int | None = None


@dataclass
class LiveQuote:
    """Price fields the dashboard reads from a live snapshot.

    Any field may be None when the upstream snapshot omits it.
    """

    ticker: str
    day_close: float | None = None
    last_trade_price: float | None = None
    previous_close: float | None = None


@dataclass
class TickerSnapshot:
    ticker: str
    todays_change: float
    todays_change_percent: float
    updated: int | None
    day: AggregateBar | None = None
    prev_day: AggregateBar | None = None
    last_trade_price: float | None = None
    last_trade_size: float | None = None
    source: ProviderName = "massive"

    def to_live_quote(self) -> LiveQuote:
        return LiveQuote(
            ticker=self.ticker,
            day_close=self.day.close if self.day else None,
            last_trade_price=self.last_trade_price,
            previous_close=self.prev_day.close if self.prev_day else None,
        )


@dataclass
class AggregatesSeries:
    ticker: str
    adjusted: bool
    bars: list[AggregateBar]
    source: ProviderName = "massive"


@dataclass
class QuoteChange:
    ticker: str
    price: float
    previous_close: float
    change: float
    change_percent: float
