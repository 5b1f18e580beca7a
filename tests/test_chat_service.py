from trading_dashboard.providers.anthropic_client import AnthropicClient
from trading_dashboard.providers.http import ProviderError
from trading_dashboard.services.base import ServiceContext
from trading_dashboard.services.chat_service import STANDBY_MESSAGE, ChatService, extract_alerts
from trading_dashboard.storage.memory_store import MemoryStore


class _StubAnthropic(AnthropicClient):
    def __init__(self, reply: str = "", error: Exception | None = None) -> None:
        super().__init__("key", "model")
        self.reply = reply
        self.error = error
        self.requests: list[tuple[str, list[dict[str, str]]]] = []

    def complete(self, system: str, messages: list[dict[str, str]], max_tokens: int = 2048) -> str:
        self.requests.append((system, messages))
        if self.error:
            raise self.error
        return self.reply


def _service(client: AnthropicClient | None, history_limit: int = 20) -> ChatService:
    ctx = ServiceContext(providers={"anthropic": client}, store=MemoryStore())
    return ChatService(ctx, commission=6.95, history_limit=history_limit)


def test_extract_alerts_strips_block() -> None:
    content = (
        "Consider RY.TO on a pullback.\n"
        "---ALERTS---\n"
        '[{"ticker":"RY.TO","signalType":"BUY","urgency":"high","message":"Pullback entry"}]\n'
        "---END_ALERTS---"
    )
    cleaned, alerts = extract_alerts(content)
    assert cleaned == "Consider RY.TO on a pullback."
    assert alerts == [{"ticker": "RY.TO", "signalType": "BUY", "urgency": "high", "message": "Pullback entry"}]


def test_extract_alerts_malformed_json_is_ignored() -> None:
    cleaned, alerts = extract_alerts("Hold.\n---ALERTS---\nnot json\n---END_ALERTS---")
    assert cleaned == "Hold."
    assert alerts == []
    assert extract_alerts("No block here") == ("No block here", [])


def test_send_without_client_stores_standby_message() -> None:
    service = _service(None)
    assert service.status() == {"connected": False}
    result = service.send("What about ENB?")
    assert result.data.content == STANDBY_MESSAGE
    assert [m.role for m in service.history()] == ["user", "assistant"]


def test_send_rejects_empty_message() -> None:
    service = _service(None)
    result = service.send("   ")
    assert result.data is None
    assert result.error.code == "VALIDATION"
    assert service.history() == []


def test_send_creates_alerts_and_stores_clean_reply() -> None:
    reply = (
        "Enbridge looks attractive.\n---ALERTS---\n"
        '[{"ticker":"ENB.TO","signalType":"BUY","urgency":"low","message":"Yield above 7%"},'
        '{"ticker":"","signalType":"BUY","urgency":"low","message":"bad"}]\n---END_ALERTS---'
    )
    client = _StubAnthropic(reply)
    service = _service(client)
    result = service.send("Thoughts on ENB?")

    assert result.data.content == "Enbridge looks attractive."
    alerts = service.ctx.store.list_alerts()
    assert len(alerts) == 1
    assert alerts[0].ticker == "ENB.TO"
    assert alerts[0].signal_type == "BUY"
    assert alerts[0].urgency == "low"
    system, messages = client.requests[0]
    assert "Commission is $6.95 per trade" in system
    assert messages == [{"role": "user", "content": "Thoughts on ENB?"}]


def test_send_includes_portfolio_context_when_requested() -> None:
    client = _StubAnthropic("ok")
    service = _service(client)
    service.ctx.store.add_portfolio_item(ticker="RY.TO", shares=50, avg_cost=142.3, current_price=147.85)
    service.send("Review my book", include_portfolio_analysis=True)
    system, _ = client.requests[0]
    assert "Current Portfolio Data:" in system
    assert "RY.TO: 50 shares @ $142.3 avg" in system


def test_history_is_limited_and_starts_with_user_turn() -> None:
    client = _StubAnthropic("reply")
    service = _service(client, history_limit=3)
    service.send("one")
    service.send("two")
    _, messages = client.requests[-1]
    assert messages == [
        {"role": "user", "content": "one"},
        {"role": "assistant", "content": "reply"},
        {"role": "user", "content": "two"},
    ]
    service.send("three")
    _, messages = client.requests[-1]
    assert messages[0] == {"role": "user", "content": "two"}


def test_send_failure_saves_ai_error_reply() -> None:
    error = ProviderError("anthropic", "RATE_LIMIT", "Anthropic rate limit reached.", 429)
    service = _service(_StubAnthropic(error=error))
    result = service.send("hello")
    assert result.data.content == "AI Error: Anthropic rate limit reached."
    assert result.warning == "Anthropic rate limit reached."

    service = _service(_StubAnthropic(error=RuntimeError("boom")))
    assert service.send("hello").data.content == "AI Error: boom"
