"""Position sizing and portfolio/trade aggregation core."""

from trading_dashboard.portfolio.analytics_core import calculate_portfolio_totals, cost_basis, market_value, unrealized_pnl
from trading_dashboard.portfolio.sizing import size_position

__all__ = ["calculate_portfolio_totals", "cost_basis", "market_value", "size_position", "unrealized_pnl"]
