import pytest

from trading_dashboard.portfolio.analytics_core import (
    calculate_holdings_value,
    calculate_portfolio_totals,
    cost_basis,
    market_value,
    return_pct,
    unrealized_pnl,
)
from trading_dashboard.portfolio.models import Position
from trading_dashboard.portfolio.views import build_position_view


def test_position_pnl_scenario() -> None:
    assert cost_basis(50, 142.30) == pytest.approx(7115.0)
    assert market_value(50, 147.85) == pytest.approx(7392.5)
    pnl = unrealized_pnl(50, 142.30, 147.85)
    assert pnl == pytest.approx(277.5)
    assert return_pct(pnl, 7115.0) == pytest.approx(3.9002, abs=1e-4)


def test_return_pct_zero_basis_is_zero() -> None:
    assert return_pct(120.0, 0.0) == 0.0


def test_portfolio_totals_sum_position_views() -> None:
    views = [
        build_position_view(Position("RY.TO", 50, 142.30, 147.85, "Financials")),
        build_position_view(Position("BCE.TO", 100, 48.75, 46.90, "Telecom")),
    ]
    totals = calculate_portfolio_totals(views)
    assert totals.total_value == pytest.approx(7392.5 + 4690.0)
    assert totals.total_cost == pytest.approx(7115.0 + 4875.0)
    assert totals.total_pnl == pytest.approx(277.5 - 185.0)
    assert totals.total_return_pct == pytest.approx(92.5 / 11990.0 * 100.0)


def test_empty_portfolio_totals_are_zero() -> None:
    totals = calculate_portfolio_totals([])
    assert totals.total_value == 0.0
    assert totals.total_cost == 0.0
    assert totals.total_pnl == 0.0
    assert totals.total_return_pct == 0.0


def test_holdings_value_sorted_by_value_descending() -> None:
    rows = calculate_holdings_value(
        [
            Position("BCE.TO", 100, 48.75, 46.90),
            Position("RY.TO", 50, 142.30, 147.85),
        ]
    )
    assert [row.ticker for row in rows] == ["RY.TO", "BCE.TO"]
    assert rows[1].cost == pytest.approx(4875.0)
