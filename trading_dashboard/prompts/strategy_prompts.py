"""Strategy-assistant prompt definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from mcp.server.fastmcp import FastMCP

from trading_dashboard.storage.records import AccountSettings, PortfolioItem, WatchlistItem

if TYPE_CHECKING:
    from trading_dashboard.tools.registry import ToolServices

ALERTS_START = "---ALERTS---"
ALERTS_END = "---END_ALERTS---"


def _money(value: float) -> str:
    return f"${value:g}"


def build_system_prompt(commission: float) -> str:
    return (
        "You are FinX Strategy Bot, a Canadian stock trading assistant specialized in TSX "
        "(Toronto Stock Exchange) stocks.\n\n"
        "You provide analysis on Canadian equities, trading strategies, and portfolio management advice. "
        f"All prices are in CAD. Commission is ${commission:.2f} per trade.\n\n"
        "Keep responses concise but actionable. When making recommendations, include specific entry, "
        "stop-loss, and take-profit levels where appropriate.\n\n"
        "If you identify actionable trade signals in your response, end your message with a section "
        "formatted exactly like this:\n"
        f"{ALERTS_START}\n"
        '[{"ticker":"TICKER","signalType":"BUY|SELL|HOLD","urgency":"high|medium|low","message":"Brief alert message"}]\n'
        f"{ALERTS_END}"
    )


def build_portfolio_context(
    settings: AccountSettings,
    watchlist: Sequence[WatchlistItem],
    portfolio: Sequence[PortfolioItem],
) -> str:
    watch_lines = "\n".join(
        f"{w.ticker}: Entry {_money(w.entry_target)}, SL {_money(w.stop_loss)}, "
        f"TP {_money(w.take_profit)}, Signal: {w.signal}"
        for w in watchlist
    )
    holding_lines = "\n".join(
        f"{p.ticker}: {p.shares:g} shares @ {_money(p.avg_cost)} avg, "
        f"Current: {_money(p.current_price)}, Sector: {p.sector}"
        for p in portfolio
    )
    return (
        "Current Portfolio Data:\n"
        f"Account Size: {_money(settings.account_size)} CAD\n"
        f"Risk Per Trade: {settings.risk_percentage:g}%\n\n"
        f"Watchlist ({len(watchlist)} items):\n{watch_lines}\n\n"
        f"Holdings ({len(portfolio)} positions):\n{holding_lines}\n\n"
        "Provide a comprehensive portfolio analysis with specific actionable recommendations."
    )


def register_strategy_prompts(mcp: FastMCP, services: "ToolServices") -> None:
    @mcp.prompt(
        name="portfolio_strategy_review",
        title="Portfolio Strategy Review",
        description="Strategy-assistant system prompt with the current watchlist, holdings and risk settings.",
    )
    def portfolio_strategy_review() -> str:
        return services.chat.build_prompt(include_portfolio_analysis=True)

    @mcp.prompt(
        name="trade_plan_review",
        title="Trade Plan Review",
        description="Ask the strategy assistant to review entry, stop and target levels for one ticker.",
    )
    def trade_plan_review(ticker: str) -> str:
        symbol = ticker.strip().upper()
        if not symbol:
            raise ValueError("Missing required argument: ticker.")
        return (
            f"Review the trade plan for {symbol}:\n"
            "1) Is the stop-loss placed below a meaningful support level?\n"
            "2) Is the take-profit target realistic relative to recent range?\n"
            "3) Does the reward/risk ratio justify the position size?\n"
            "4) List any alerts worth raising."
        )
