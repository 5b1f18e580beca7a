"""Strategy chat assistant backed by the Anthropic provider."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from trading_dashboard.portfolio.validation import validate_alert
from trading_dashboard.prompts.strategy_prompts import ALERTS_END, ALERTS_START, build_portfolio_context, build_system_prompt
from trading_dashboard.providers.anthropic_client import AnthropicClient
from trading_dashboard.providers.http import ProviderError
from trading_dashboard.services.base import ErrorEnvelope, ServiceContext, ServiceResult
from trading_dashboard.storage.records import Alert, ChatMessage

LOGGER = logging.getLogger(__name__)
STANDBY_MESSAGE = (
    "AI features are in standby mode. Add an Anthropic API key (CLAUDE_API_KEY) "
    "to enable Strategy AI analysis."
)
ALERT_BLOCK_PATTERN = re.compile(re.escape(ALERTS_START) + r"\n?([\s\S]*?)\n?" + re.escape(ALERTS_END))


def extract_alerts(content: str) -> tuple[str, list[dict[str, Any]]]:
    """Split an assistant reply into display text and raw alert dicts.

    The alert block is always stripped; unparseable JSON yields no alerts.
    """
    match = ALERT_BLOCK_PATTERN.search(content)
    if not match:
        return content, []
    cleaned = ALERT_BLOCK_PATTERN.sub("", content, count=1).strip()
    try:
        parsed = json.loads(match.group(1))
    except json.JSONDecodeError:
        LOGGER.warning("assistant alert block is not valid JSON; ignoring it")
        return cleaned, []
    if isinstance(parsed, dict):
        parsed = [parsed]
    if not isinstance(parsed, list):
        return cleaned, []
    return cleaned, [item for item in parsed if isinstance(item, dict)]


class ChatService:
    def __init__(self, ctx: ServiceContext, commission: float = 6.95, history_limit: int = 20) -> None:
        self.ctx = ctx
        self.commission = commission
        self.history_limit = max(1, history_limit)

    def _anthropic(self) -> AnthropicClient | None:
        client = self.ctx.get_provider("anthropic")
        return client if isinstance(client, AnthropicClient) else None

    def status(self) -> dict[str, bool]:
        return {"connected": self._anthropic() is not None}

    def history(self) -> list[ChatMessage]:
        return self.ctx.store.list_chat_messages()

    def clear(self) -> None:
        self.ctx.store.clear_chat_messages()

    def build_prompt(self, include_portfolio_analysis: bool = False) -> str:
        prompt = build_system_prompt(self.commission)
        if include_portfolio_analysis:
            store = self.ctx.store
            context = build_portfolio_context(store.get_settings(), store.list_watchlist(), store.list_portfolio())
            prompt = f"{prompt}\n\n{context}"
        return prompt

    def _recent_messages(self) -> list[dict[str, str]]:
        recent = [
            {"role": message.role, "content": message.content}
            for message in self.history()[-self.history_limit :]
            if message.role in {"user", "assistant"}
        ]
        # the Messages API requires the conversation to open with a user turn
        while recent and recent[0]["role"] != "user":
            recent.pop(0)
        return recent

    def _store_alerts(self, raw_alerts: list[dict[str, Any]]) -> list[Alert]:
        created: list[Alert] = []
        for raw in raw_alerts:
            fields, issues = validate_alert(
                {
                    "ticker": raw.get("ticker"),
                    "signal_type": raw.get("signalType") or raw.get("signal_type"),
                    "urgency": raw.get("urgency"),
                    "message": raw.get("message"),
                }
            )
            if issues:
                LOGGER.warning("skipping assistant alert: %s", "; ".join(issue.message for issue in issues))
                continue
            created.append(self.ctx.store.add_alert(**fields))
        return created

    def send(self, message: str, include_portfolio_analysis: bool = False) -> ServiceResult[ChatMessage]:
        text = message.strip() if isinstance(message, str) else ""
        if not text:
            return ServiceResult(
                data=None,
                error=ErrorEnvelope(code="VALIDATION", message="Message is required", retriable=False),
            )
        store = self.ctx.store
        store.add_chat_message("user", text)

        client = self._anthropic()
        if client is None:
            return ServiceResult(data=store.add_chat_message("assistant", STANDBY_MESSAGE), source="standby")

        try:
            reply = client.complete(self.build_prompt(include_portfolio_analysis), self._recent_messages())
        except ProviderError as error:
            LOGGER.warning("assistant request failed: code=%s status=%s", error.code, error.status)
            saved = store.add_chat_message("assistant", f"AI Error: {error.message}")
            return ServiceResult(data=saved, source="anthropic", warning=error.message)
        except Exception as error:
            LOGGER.exception("assistant request failed unexpectedly")
            saved = store.add_chat_message("assistant", f"AI Error: {str(error) or 'Failed to get response from assistant.'}")
            return ServiceResult(data=saved, source="anthropic", warning="unexpected assistant failure")

        content, raw_alerts = extract_alerts(reply)
        created = self._store_alerts(raw_alerts)
        warning = f"Created {len(created)} alert(s) from assistant reply." if created else None
        return ServiceResult(data=store.add_chat_message("assistant", content), source="anthropic", warning=warning)
