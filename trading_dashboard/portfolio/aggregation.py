"""Trade-journal and holdings rollups for dashboard charts.

Every rollup re-scans the full snapshot it is given. Trade dates are opaque
string keys; ascending order is only chronological for ISO ``YYYY-MM-DD``.
"""

from __future__ import annotations

from typing import Iterable, Sequence

import pandas as pd

from trading_dashboard.portfolio.analytics_core import cost_basis, market_value, return_pct, unrealized_pnl
from trading_dashboard.portfolio.models import (
    DEFAULT_SECTOR,
    CategoryTotal,
    DateBucket,
    FeePoint,
    PnlRank,
    Position,
    TradeRecord,
    TradeTotals,
)

TRADE_COLUMNS = ["date", "ticker", "type", "notional", "fees"]
DEFAULT_TICKER_LIMIT = 10


def _trade_frame(trades: Iterable[TradeRecord]) -> pd.DataFrame:
    rows = [
        {
            "date": trade.date,
            "ticker": trade.ticker,
            "type": trade.type,
            "notional": market_value(trade.shares, trade.price),
            "fees": float(trade.fees),
        }
        for trade in trades
    ]
    return pd.DataFrame(rows, columns=TRADE_COLUMNS)


def normalize_sector(sector: str | None) -> str:
    clean = (sector or "").strip()
    return clean or DEFAULT_SECTOR


def calculate_trade_totals(trades: Sequence[TradeRecord]) -> TradeTotals:
    frame = _trade_frame(trades)
    if frame.empty:
        return TradeTotals(total_bought=0.0, total_sold=0.0, total_fees=0.0, trade_count=0)
    return TradeTotals(
        total_bought=float(frame.loc[frame["type"] == "BUY", "notional"].sum()),
        total_sold=float(frame.loc[frame["type"] == "SELL", "notional"].sum()),
        total_fees=float(frame["fees"].sum()),
        trade_count=int(len(frame)),
    )


def trades_by_date(trades: Sequence[TradeRecord]) -> list[DateBucket]:
    frame = _trade_frame(trades)
    if frame.empty:
        return []
    frame["buys"] = frame["notional"].where(frame["type"] == "BUY", 0.0)
    frame["sells"] = frame["notional"].where(frame["type"] == "SELL", 0.0)
    grouped = frame.groupby("date", sort=True)[["buys", "sells", "fees"]].sum()
    return [
        DateBucket(date=str(row.Index), buys=float(row.buys), sells=float(row.sells), fees=float(row.fees))
        for row in grouped.itertuples()
    ]


def cumulative_fees(buckets: Sequence[DateBucket]) -> list[FeePoint]:
    running = 0.0
    points: list[FeePoint] = []
    for bucket in buckets:
        running += bucket.fees
        points.append(FeePoint(date=bucket.date, fees=running))
    return points


def volume_by_ticker(trades: Sequence[TradeRecord], limit: int | None = DEFAULT_TICKER_LIMIT) -> list[CategoryTotal]:
    frame = _trade_frame(trades)
    if frame.empty:
        return []
    totals = frame.groupby("ticker", sort=False)["notional"].sum().sort_values(ascending=False, kind="stable")
    if limit is not None:
        totals = totals.head(max(0, limit))
    return [CategoryTotal(category=str(ticker), value=float(value)) for ticker, value in totals.items()]


def value_by_sector(positions: Sequence[Position]) -> list[CategoryTotal]:
    if not positions:
        return []
    frame = pd.DataFrame(
        [
            {"sector": normalize_sector(p.sector), "value": market_value(p.shares, p.current_price)}
            for p in positions
        ],
        columns=["sector", "value"],
    )
    totals = frame.groupby("sector", sort=False)["value"].sum().sort_values(ascending=False, kind="stable")
    return [CategoryTotal(category=str(sector), value=float(value)) for sector, value in totals.items()]


def rank_positions_by_pnl(positions: Sequence[Position]) -> list[PnlRank]:
    ranks = []
    for p in positions:
        pnl = unrealized_pnl(p.shares, p.avg_cost, p.current_price)
        ranks.append(PnlRank(ticker=p.ticker, pnl=pnl, return_pct=return_pct(pnl, cost_basis(p.shares, p.avg_cost))))
    return sorted(ranks, key=lambda rank: rank.pnl, reverse=True)
