"""Shared service orchestration helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from trading_dashboard.providers.http import ProviderError

TICKER_PATTERN = re.compile(r"^[A-Z][A-Z0-9.\-]{0,9}$")
ISO_DAY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
VALID_TIMESPANS = {"minute", "hour", "day", "week", "month", "quarter", "year"}
T = TypeVar("T")


@dataclass
class ErrorEnvelope:
    code: str
    message: str
    retriable: bool = True
    provider: str | None = None


@dataclass
class ServiceResult(Generic[T]):
    data: T | None
    source: str | None = None
    warning: str | None = None
    error: ErrorEnvelope | None = None


@dataclass
class ServiceContext:
    providers: dict[str, object]
    store: Any

    def get_provider(self, name: str) -> object | None:
        return self.providers.get(name)


def validate_ticker(ticker: str) -> str:
    clean = ticker.strip().upper()
    if not clean or len(clean) > 10 or not TICKER_PATTERN.match(clean):
        raise ValueError("Ticker must be 1-10 chars: A-Z, 0-9, dot, hyphen.")
    return clean


def validate_day(value: str, field: str) -> str:
    clean = value.strip()
    if not ISO_DAY_PATTERN.match(clean):
        raise ValueError(f"`{field}` must be a date formatted YYYY-MM-DD.")
    return clean


def validate_timespan(timespan: str) -> str:
    clean = timespan.strip().lower()
    if clean not in VALID_TIMESPANS:
        raise ValueError(f"Timespan must be one of: {', '.join(sorted(VALID_TIMESPANS))}.")
    return clean


def envelope_from_provider_error(error: ProviderError) -> ErrorEnvelope:
    retriable = error.code in {"RATE_LIMIT", "NETWORK", "UPSTREAM", "BAD_RESPONSE"}
    return ErrorEnvelope(code=error.code, message=error.message, retriable=retriable, provider=error.provider)
