import pytest

from trading_dashboard.portfolio.models import Position, RiskSettings, WatchlistEntry
from trading_dashboard.portfolio.sizing import INVALID_STOP_MESSAGE
from trading_dashboard.portfolio.views import (
    build_portfolio_view,
    build_position_view,
    build_watchlist_view,
    live_price,
    resolve_price,
)
from trading_dashboard.providers.models import LiveQuote


def test_live_price_prefers_day_close_then_last_trade() -> None:
    assert live_price(LiveQuote("RY.TO", day_close=150.0, last_trade_price=149.0)) == 150.0
    assert live_price(LiveQuote("RY.TO", day_close=0.0, last_trade_price=149.0)) == 149.0
    assert live_price(LiveQuote("RY.TO", previous_close=140.0)) is None
    assert live_price(None) is None


def test_resolve_price_falls_back_to_stored() -> None:
    assert resolve_price(147.85, None) == 147.85
    assert resolve_price(147.85, LiveQuote("RY.TO")) == 147.85
    assert resolve_price(147.85, LiveQuote("RY.TO", last_trade_price=151.0)) == 151.0


def test_position_view_with_live_quote() -> None:
    view = build_position_view(Position("RY.TO", 50, 142.30, 147.85, None), LiveQuote("RY.TO", day_close=150.0))
    assert view.live is True
    assert view.price == 150.0
    assert view.market_value == pytest.approx(7500.0)
    assert view.unrealized_pnl == pytest.approx(385.0)
    assert view.sector == "Other"


def test_portfolio_totals_use_live_prices_and_rollups_use_stored() -> None:
    positions = [
        Position("RY.TO", 50, 142.30, 147.85, "Financials"),
        Position("BCE.TO", 100, 48.75, 46.90, "Telecom"),
    ]
    quotes = {"RY.TO": LiveQuote("RY.TO", day_close=150.0)}
    view = build_portfolio_view(positions, quotes.get)

    assert view.positions[0].live is True
    assert view.positions[1].live is False
    assert view.totals.total_value == pytest.approx(7500.0 + 4690.0)
    sectors = {row.category: row.value for row in view.sectors}
    assert sectors["Financials"] == pytest.approx(7392.5)
    assert view.pnl_ranking[0].pnl == pytest.approx(277.5)
    assert view.holdings_value[0].value == pytest.approx(7392.5)


def test_portfolio_view_without_lookup() -> None:
    view = build_portfolio_view([Position("RY.TO", 50, 142.30, 147.85)])
    assert view.totals.total_pnl == pytest.approx(277.5)


def test_watchlist_view_invalid_stop_message() -> None:
    view = build_watchlist_view(
        WatchlistEntry("RY.TO", 100, 100, 120),
        RiskSettings(account_size=25000, risk_percentage=2),
    )
    assert view.sizing is None
    assert view.message == INVALID_STOP_MESSAGE


def test_watchlist_view_warnings_and_live_price() -> None:
    view = build_watchlist_view(
        WatchlistEntry("RY.TO", 100, 95, 90),
        RiskSettings(account_size=25000, risk_percentage=2),
        LiveQuote("RY.TO", last_trade_price=99.5),
    )
    assert view.sizing is not None
    assert view.live_price == 99.5
    assert view.message is None
    assert any("below entry" in warning for warning in view.warnings)


def test_totals_without_lookup_use_stored_prices_with_lookup_track_quotes() -> None:
    positions = [Position("RY.TO", 50, 142.30, 147.85, "Financials")]
    stored = build_portfolio_view(positions)
    live = build_portfolio_view(positions, {"RY.TO": LiveQuote("RY.TO", day_close=150.0)}.get)
    assert stored.totals.total_value == pytest.approx(7392.5)
    assert live.totals.total_value == pytest.approx(7500.0)
    assert live.sectors == stored.sectors
