"""HTTP utilities and normalized provider errors."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from typing import Any, Literal

import requests
from requests.adapters import HTTPAdapter

from trading_dashboard.providers.models import ProviderName

ProviderErrorCode = Literal["RATE_LIMIT", "AUTH", "NOT_FOUND", "UPSTREAM", "NETWORK", "BAD_RESPONSE"]
TRANSIENT_CODES = {408, 425, 429, 500, 502, 503, 504}
MAX_ERROR_BODY_CHARS = 300

_SESSION = requests.Session()
_SESSION.mount("https://", HTTPAdapter(pool_connections=10, pool_maxsize=20))
_SESSION.mount("http://", HTTPAdapter(pool_connections=10, pool_maxsize=20))


@dataclass
class ProviderError(Exception):
    provider: ProviderName
    code: ProviderErrorCode
    message: str
    status: int | None = None

    def __str__(self) -> str:
        return self.message


def map_status_to_code(status: int) -> ProviderErrorCode:
    if status in {401, 403}:
        return "AUTH"
    if status == 404:
        return "NOT_FOUND"
    if status == 429:
        return "RATE_LIMIT"
    return "UPSTREAM"


def _backoff(attempt: int) -> None:
    time.sleep(0.25 * (2 ** (attempt - 1)))


def fetch_json(
    url: str,
    provider: ProviderName,
    timeout_seconds: float = 15.0,
    params: dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
    max_retries: int = 3,
) -> Any:
    """GET a JSON document, mapping transport and status failures to ProviderError.

    Transient statuses are retried with exponential backoff. Error messages
    carry the status and a truncated upstream body.
    """
    attempts = max(1, max_retries)
    last_error: ProviderError | None = None
    for attempt in range(1, attempts + 1):
        try:
            response = _SESSION.get(url, params=params, timeout=timeout_seconds, headers=headers)
        except requests.RequestException as error:
            mapped = ProviderError(provider, "NETWORK", f"{provider} request failed due to network error.")
            last_error = mapped
            if attempt < attempts:
                _backoff(attempt)
                continue
            raise mapped from error

        raw = response.text or ""
        if not response.ok:
            mapped = ProviderError(
                provider,
                map_status_to_code(response.status_code),
                f"{provider} API error ({response.status_code}): {raw[:MAX_ERROR_BODY_CHARS]}".strip(),
                response.status_code,
            )
            last_error = mapped
            if response.status_code in TRANSIENT_CODES and attempt < attempts:
                _backoff(attempt)
                continue
            raise mapped

        if not raw:
            return {}
        try:
            return json.loads(raw)
        except json.JSONDecodeError as error:
            raise ProviderError(
                provider,
                "BAD_RESPONSE",
                f"{provider} returned non-JSON content.",
                response.status_code,
            ) from error

    if last_error:
        raise last_error
    raise ProviderError(provider, "UPSTREAM", f"{provider} request failed.")
