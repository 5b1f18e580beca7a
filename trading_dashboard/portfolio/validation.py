"""Boundary validation for incoming watchlist, holding, trade, alert and settings payloads."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Callable

from trading_dashboard.portfolio.models import ValidationIssue
from trading_dashboard.services.base import validate_ticker

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
VALID_SIGNALS = {"BUY", "SELL", "HOLD", "WATCH"}
VALID_TRADE_TYPES = {"BUY", "SELL"}
VALID_URGENCIES = {"high", "medium", "low"}
VALID_ALERT_SIGNALS = VALID_SIGNALS


@dataclass(frozen=True)
class FieldRule:
    name: str
    parse: Callable[[str, Any], Any]
    required: bool = True


def _number(field: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        if isinstance(value, str):
            try:
                value = float(value)
            except ValueError:
                raise ValueError(f"{field} must be numeric.") from None
        else:
            raise ValueError(f"{field} must be numeric.")
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"{field} must be a finite number.")
    return number


def _non_negative(field: str, value: Any) -> float:
    number = _number(field, value)
    if number < 0:
        raise ValueError(f"{field} must be zero or greater.")
    return number


def _positive(field: str, value: Any) -> float:
    number = _number(field, value)
    if number <= 0:
        raise ValueError(f"{field} must be greater than zero.")
    return number


def _percentage(field: str, value: Any) -> float:
    number = _number(field, value)
    if number <= 0 or number > 100:
        raise ValueError(f"{field} must be greater than 0 and at most 100.")
    return number


def _positive_int(field: str, value: Any) -> int:
    number = _number(field, value)
    if number <= 0 or not number.is_integer():
        raise ValueError(f"{field} must be a positive integer.")
    return int(number)


def _ticker(field: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string.")
    return validate_ticker(value)


def _text(field: str, value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string.")
    return value.strip()


def _required_text(field: str, value: Any) -> str:
    text = _text(field, value)
    if not text:
        raise ValueError(f"{field} must not be empty.")
    return text


def _choice(choices: set[str], upper: bool = True) -> Callable[[str, Any], str]:
    def parse(field: str, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError(f"{field} must be one of {sorted(choices)}.")
        clean = value.strip().upper() if upper else value.strip().lower()
        if clean not in choices:
            raise ValueError(f"{field} must be one of {sorted(choices)}.")
        return clean

    return parse


def _iso_date(field: str, value: Any) -> str:
    if not isinstance(value, str) or not ISO_DATE_PATTERN.match(value.strip()):
        raise ValueError(f"{field} must be a date formatted YYYY-MM-DD.")
    return value.strip()


def _flag(field: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{field} must be true or false.")
    return value


WATCHLIST_RULES = [
    FieldRule("ticker", _ticker),
    FieldRule("entry_target", _non_negative),
    FieldRule("stop_loss", _non_negative),
    FieldRule("take_profit", _non_negative),
    FieldRule("signal", _choice(VALID_SIGNALS), required=False),
    FieldRule("sector", _text, required=False),
    FieldRule("notes", _text, required=False),
]

PORTFOLIO_RULES = [
    FieldRule("ticker", _ticker),
    FieldRule("shares", _non_negative),
    FieldRule("avg_cost", _non_negative),
    FieldRule("current_price", _non_negative),
    FieldRule("sector", _text, required=False),
]

TRADE_RULES = [
    FieldRule("type", _choice(VALID_TRADE_TYPES)),
    FieldRule("ticker", _ticker),
    FieldRule("shares", _positive),
    FieldRule("price", _non_negative),
    FieldRule("fees", _non_negative, required=False),
    FieldRule("date", _iso_date),
    FieldRule("notes", _text, required=False),
]

ALERT_RULES = [
    FieldRule("ticker", _ticker),
    FieldRule("signal_type", _choice(VALID_ALERT_SIGNALS)),
    FieldRule("urgency", _choice(VALID_URGENCIES, upper=False), required=False),
    FieldRule("message", _required_text),
    FieldRule("is_read", _flag, required=False),
]

SETTINGS_RULES = [
    FieldRule("account_size", _positive, required=False),
    FieldRule("risk_percentage", _percentage, required=False),
    FieldRule("flat_fee_per_trade", _non_negative, required=False),
    FieldRule("email", _text, required=False),
    FieldRule("analysis_interval", _positive_int, required=False),
]


def validate_payload(
    payload: Any,
    rules: list[FieldRule],
    partial: bool = False,
) -> tuple[dict[str, Any], list[ValidationIssue]]:
    """Parse a request body against field rules.

    Unknown keys are dropped. With ``partial`` only supplied fields are parsed,
    which is how update requests are validated.
    """
    if not isinstance(payload, dict):
        return {}, [ValidationIssue(field="body", code="invalid_body", message="Request body must be an object.")]

    cleaned: dict[str, Any] = {}
    issues: list[ValidationIssue] = []
    for rule in rules:
        if rule.name not in payload or payload[rule.name] is None:
            if rule.required and not partial:
                issues.append(
                    ValidationIssue(field=rule.name, code="missing_field", message=f"Required field is missing: {rule.name}")
                )
            continue
        try:
            cleaned[rule.name] = rule.parse(rule.name, payload[rule.name])
        except ValueError as error:
            issues.append(ValidationIssue(field=rule.name, message=str(error)))
    return cleaned, issues


def validate_watchlist(payload: Any, partial: bool = False) -> tuple[dict[str, Any], list[ValidationIssue]]:
    return validate_payload(payload, WATCHLIST_RULES, partial)


def validate_portfolio(payload: Any, partial: bool = False) -> tuple[dict[str, Any], list[ValidationIssue]]:
    return validate_payload(payload, PORTFOLIO_RULES, partial)


def validate_trade(payload: Any) -> tuple[dict[str, Any], list[ValidationIssue]]:
    return validate_payload(payload, TRADE_RULES)


def validate_alert(payload: Any) -> tuple[dict[str, Any], list[ValidationIssue]]:
    return validate_payload(payload, ALERT_RULES)


def validate_settings(payload: Any) -> tuple[dict[str, Any], list[ValidationIssue]]:
    return validate_payload(payload, SETTINGS_RULES, partial=True)
