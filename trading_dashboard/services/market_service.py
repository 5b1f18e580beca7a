"""Market-data service over the Massive REST provider."""

from __future__ import annotations

import logging
import time

from trading_dashboard.providers.http import ProviderError
from trading_dashboard.providers.massive import MassiveClient
from trading_dashboard.providers.models import AggregateBar, AggregatesSeries, LiveQuote, QuoteChange, TickerSnapshot
from trading_dashboard.services.base import (
    ErrorEnvelope,
    ServiceContext,
    ServiceResult,
    envelope_from_provider_error,
    validate_day,
    validate_ticker,
    validate_timespan,
)

LOGGER = logging.getLogger(__name__)
SOURCE = "Massive"
NOT_CONFIGURED_MESSAGE = "Market data unavailable: MASSIVE_API_KEY not configured"


def _not_configured() -> ServiceResult:
    return ServiceResult(
        data=None,
        error=ErrorEnvelope(code="DATA_UNAVAILABLE", message=NOT_CONFIGURED_MESSAGE, retriable=False),
    )


def quote_change(quote: LiveQuote) -> QuoteChange:
    """Display price and day change versus the previous close."""
    price = quote.day_close or quote.last_trade_price or quote.previous_close or 0.0
    previous_close = quote.previous_close or price
    change = price - previous_close
    change_percent = (change / previous_close) * 100.0 if previous_close else 0.0
    return QuoteChange(
        ticker=quote.ticker,
        price=price,
        previous_close=previous_close,
        change=change,
        change_percent=change_percent,
    )


class MarketService:
    def __init__(self, ctx: ServiceContext) -> None:
        self.ctx = ctx

    def _massive(self) -> MassiveClient | None:
        client = self.ctx.get_provider("massive")
        return client if isinstance(client, MassiveClient) else None

    @property
    def configured(self) -> bool:
        return self._massive() is not None

    def get_snapshot(self, ticker: str) -> ServiceResult[TickerSnapshot]:
        client = self._massive()
        if not client:
            return _not_configured()
        symbol = validate_ticker(ticker)
        started = time.perf_counter()
        try:
            snapshot = client.get_snapshot(symbol)
        except ProviderError as error:
            LOGGER.warning("snapshot failed: ticker=%s code=%s status=%s", symbol, error.code, error.status)
            return ServiceResult(data=None, error=envelope_from_provider_error(error))
        LOGGER.info(
            "snapshot fetched: ticker=%s found=%s latency_ms=%s",
            symbol,
            snapshot is not None,
            round((time.perf_counter() - started) * 1000, 2),
        )
        if snapshot is None:
            return ServiceResult(
                data=None,
                error=ErrorEnvelope(code="NOT_FOUND", message=f"No snapshot for {symbol}.", retriable=False),
            )
        return ServiceResult(data=snapshot, source=SOURCE)

    def get_chart(
        self,
        ticker: str,
        from_date: str,
        to_date: str,
        multiplier: int = 1,
        timespan: str = "day",
    ) -> ServiceResult[AggregatesSeries]:
        client = self._massive()
        if not client:
            return _not_configured()
        symbol = validate_ticker(ticker)
        start = validate_day(from_date, "from")
        end = validate_day(to_date, "to")
        if start > end:
            raise ValueError("`from` must not be after `to`.")
        if multiplier < 1:
            raise ValueError("Multiplier must be a positive integer.")
        span = validate_timespan(timespan)
        try:
            series = client.get_aggregates(symbol, multiplier, span, start, end, adjusted=True, sort="asc")
        except ProviderError as error:
            LOGGER.warning("aggregates failed: ticker=%s code=%s status=%s", symbol, error.code, error.status)
            return ServiceResult(data=None, error=envelope_from_provider_error(error))
        return ServiceResult(data=series, source=SOURCE)

    def get_previous_close(self, ticker: str) -> ServiceResult[AggregateBar]:
        client = self._massive()
        if not client:
            return _not_configured()
        symbol = validate_ticker(ticker)
        try:
            bar = client.get_previous_close(symbol)
        except ProviderError as error:
            LOGGER.warning("previous close failed: ticker=%s code=%s status=%s", symbol, error.code, error.status)
            return ServiceResult(data=None, error=envelope_from_provider_error(error))
        if bar is None:
            return ServiceResult(
                data=None,
                error=ErrorEnvelope(code="NOT_FOUND", message=f"No previous close for {symbol}.", retriable=False),
            )
        return ServiceResult(data=bar, source=SOURCE)

    def get_live_quote(self, ticker: str) -> LiveQuote | None:
        """Live price fields for a ticker, or None when market data is unavailable."""
        if not self.configured:
            return None
        try:
            result = self.get_snapshot(ticker)
        except ValueError:
            LOGGER.warning("live quote skipped for invalid ticker: %s", ticker)
            return None
        if result.data is None:
            return None
        return result.data.to_live_quote()

    def get_quote_change(self, ticker: str) -> ServiceResult[QuoteChange]:
        result = self.get_snapshot(ticker)
        if result.data is None:
            return ServiceResult(data=None, error=result.error)
        return ServiceResult(data=quote_change(result.data.to_live_quote()), source=result.source)
