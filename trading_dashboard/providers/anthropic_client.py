"""Anthropic Messages client backing the strategy chat assistant."""

from __future__ import annotations

import json
from typing import Any

import requests

from trading_dashboard.providers.http import ProviderError

ANTHROPIC_MESSAGES_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"


class AnthropicClient:
    def __init__(self, api_key: str, model: str, timeout_seconds: float = 30.0) -> None:
        self.api_key = api_key
        self.model = model
        self.timeout_seconds = timeout_seconds
        self.base_url = ANTHROPIC_MESSAGES_URL

    def complete(self, system: str, messages: list[dict[str, str]], max_tokens: int = 2048) -> str:
        """Return the assistant text for a system prompt and a user/assistant history."""
        payload: dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens,
            "system": system,
            "messages": messages,
        }
        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "content-type": "application/json",
        }
        try:
            response = requests.post(
                self.base_url,
                timeout=self.timeout_seconds,
                headers=headers,
                data=json.dumps(payload),
            )
        except requests.RequestException as error:
            raise ProviderError("anthropic", "NETWORK", f"Anthropic request failed: {error}") from error
        if response.status_code == 401:
            raise ProviderError("anthropic", "AUTH", "Anthropic authentication failed.", response.status_code)
        if response.status_code == 429:
            raise ProviderError("anthropic", "RATE_LIMIT", "Anthropic rate limit reached.", response.status_code)
        if not response.ok:
            raise ProviderError(
                "anthropic",
                "UPSTREAM",
                f"Anthropic request failed with status {response.status_code}.",
                response.status_code,
            )
        try:
            data = response.json()
        except ValueError:
            raise ProviderError("anthropic", "BAD_RESPONSE", "Anthropic returned non-JSON response.", response.status_code)
        content = data.get("content") if isinstance(data, dict) else None
        if not isinstance(content, list):
            return ""
        texts = [item.get("text") for item in content if isinstance(item, dict) and isinstance(item.get("text"), str)]
        return "\n".join(texts).strip()
