"""Assemble per-item and portfolio-level view models from stored records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Sequence

from trading_dashboard.portfolio.aggregation import normalize_sector, rank_positions_by_pnl, value_by_sector
from trading_dashboard.portfolio.analytics_core import (
    calculate_holdings_value,
    calculate_portfolio_totals,
    cost_basis,
    market_value,
    return_pct,
    unrealized_pnl,
)
from trading_dashboard.portfolio.models import (
    CategoryTotal,
    HoldingValue,
    PnlRank,
    PortfolioTotals,
    Position,
    PositionSizing,
    PositionView,
    RiskSettings,
    WatchlistEntry,
)
from trading_dashboard.portfolio.sizing import INVALID_STOP_MESSAGE, size_watchlist_entry
from trading_dashboard.providers.models import LiveQuote

PriceLookup = Callable[[str], "LiveQuote | None"]


@dataclass(frozen=True)
class PortfolioView:
    positions: list[PositionView]
    totals: PortfolioTotals
    sectors: list[CategoryTotal]
    pnl_ranking: list[PnlRank]
    holdings_value: list[HoldingValue]


@dataclass(frozen=True)
class WatchlistView:
    entry: WatchlistEntry
    sizing: PositionSizing | None
    live_price: float | None = None
    message: str | None = None
    warnings: list[str] = field(default_factory=list)


def live_price(quote: LiveQuote | None) -> float | None:
    """Freshest non-zero live price: day close, then last trade."""
    if quote is None:
        return None
    for value in (quote.day_close, quote.last_trade_price):
        if value:
            return float(value)
    return None


def resolve_price(stored_price: float, quote: LiveQuote | None) -> float:
    price = live_price(quote)
    return stored_price if price is None else price


def build_position_view(position: Position, quote: LiveQuote | None = None) -> PositionView:
    price = resolve_price(position.current_price, quote)
    value = market_value(position.shares, price)
    basis = cost_basis(position.shares, position.avg_cost)
    pnl = unrealized_pnl(position.shares, position.avg_cost, price)
    return PositionView(
        ticker=position.ticker,
        shares=position.shares,
        avg_cost=position.avg_cost,
        price=price,
        sector=normalize_sector(position.sector),
        market_value=value,
        cost_basis=basis,
        unrealized_pnl=pnl,
        return_pct=return_pct(pnl, basis),
        live=live_price(quote) is not None,
    )


def build_portfolio_view(positions: Sequence[Position], price_lookup: PriceLookup | None = None) -> PortfolioView:
    """Per-position views with live prices applied, plus stored-price rollups.

    Totals follow the per-position prices. The sector, P&L and holdings
    rollups chart the stored prices, so a quote outage never reshapes them.
    Header totals built purely from stored ``current_price`` values are
    obtained by passing no ``price_lookup``; with one, totals track live
    quotes and can differ from the stored-price rollups.
    """
    views = [
        build_position_view(position, price_lookup(position.ticker) if price_lookup else None)
        for position in positions
    ]
    return PortfolioView(
        positions=views,
        totals=calculate_portfolio_totals(views),
        sectors=value_by_sector(positions),
        pnl_ranking=rank_positions_by_pnl(positions),
        holdings_value=calculate_holdings_value(positions),
    )


def build_watchlist_view(
    entry: WatchlistEntry,
    risk: RiskSettings,
    quote: LiveQuote | None = None,
) -> WatchlistView:
    sizing = size_watchlist_entry(entry, risk)
    warnings: list[str] = []
    if sizing is not None and sizing.inverted_target:
        warnings.append("Take profit is below entry; potential profit and reward/risk are negative.")
    if sizing is not None and sizing.shares == 0:
        warnings.append("Risk budget cannot afford a single share at this stop distance.")
    return WatchlistView(
        entry=entry,
        sizing=sizing,
        live_price=live_price(quote),
        message=INVALID_STOP_MESSAGE if sizing is None else None,
        warnings=warnings,
    )
