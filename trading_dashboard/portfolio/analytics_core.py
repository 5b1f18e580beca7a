"""Per-position and portfolio-level P&L arithmetic."""

from __future__ import annotations

from typing import Iterable

from trading_dashboard.portfolio.models import HoldingValue, PortfolioTotals, Position, PositionView


def market_value(shares: float, price: float) -> float:
    return shares * price


def cost_basis(shares: float, avg_cost: float) -> float:
    return shares * avg_cost


def unrealized_pnl(shares: float, avg_cost: float, price: float) -> float:
    return market_value(shares, price) - cost_basis(shares, avg_cost)


def return_pct(pnl: float, basis: float) -> float:
    """Percentage return on cost; a zero-cost position reports 0."""
    if basis <= 0:
        return 0.0
    return pnl / basis * 100.0


def calculate_portfolio_totals(views: Iterable[PositionView]) -> PortfolioTotals:
    total_value = 0.0
    total_cost = 0.0
    for view in views:
        total_value += view.market_value
        total_cost += view.cost_basis
    total_pnl = total_value - total_cost
    return PortfolioTotals(
        total_value=total_value,
        total_cost=total_cost,
        total_pnl=total_pnl,
        total_return_pct=return_pct(total_pnl, total_cost),
    )


def calculate_holdings_value(positions: Iterable[Position]) -> list[HoldingValue]:
    rows = [
        HoldingValue(
            ticker=p.ticker,
            value=market_value(p.shares, p.current_price),
            cost=cost_basis(p.shares, p.avg_cost),
        )
        for p in positions
    ]
    return sorted(rows, key=lambda row: row.value, reverse=True)
