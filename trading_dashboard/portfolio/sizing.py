"""Risk-budget position sizing for long entries."""

from __future__ import annotations

import math

from trading_dashboard.portfolio.models import PositionSizing, RiskSettings, WatchlistEntry

INVALID_STOP_MESSAGE = "Invalid stop loss (must be below entry)"


def size_position(
    entry_target: float,
    stop_loss: float,
    take_profit: float,
    account_size: float,
    risk_percentage: float,
    flat_fee: float,
) -> PositionSizing | None:
    """Size a long trade so a stop-out loses at most the risk budget.

    Returns None when the stop is not strictly below the entry. Callers render
    INVALID_STOP_MESSAGE for that case. Profit and reward/risk are not clamped:
    a take-profit below entry yields negative figures and sets inverted_target.
    """
    risk_per_share = entry_target - stop_loss
    if risk_per_share <= 0:
        return None
    risk_amount = account_size * (risk_percentage / 100.0)
    shares = max(0, math.floor(risk_amount / risk_per_share))
    reward_per_share = take_profit - entry_target
    return PositionSizing(
        shares=shares,
        risk_amount=risk_amount,
        risk_per_share=risk_per_share,
        total_cost=shares * entry_target + flat_fee,
        potential_profit=shares * reward_per_share - flat_fee,
        risk_reward_ratio=reward_per_share / risk_per_share,
        inverted_target=reward_per_share < 0,
    )


def size_watchlist_entry(entry: WatchlistEntry, risk: RiskSettings) -> PositionSizing | None:
    return size_position(
        entry_target=entry.entry_target,
        stop_loss=entry.stop_loss,
        take_profit=entry.take_profit,
        account_size=risk.account_size,
        risk_percentage=risk.risk_percentage,
        flat_fee=risk.flat_fee_per_trade,
    )
