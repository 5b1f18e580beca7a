from trading_dashboard.storage.memory_store import MemoryStore
from trading_dashboard.storage.records import AccountSettings


def test_watchlist_crud_and_newest_first() -> None:
    store = MemoryStore()
    first = store.add_watchlist_item(ticker="RY.TO", entry_target=145.5, stop_loss=140, take_profit=158)
    second = store.add_watchlist_item(ticker="TD.TO", entry_target=82, stop_loss=78, take_profit=90, signal="SELL")
    assert first.signal == "WATCH"
    assert first.sector == "Other"
    assert [item.id for item in store.list_watchlist()] == [second.id, first.id]

    updated = store.update_watchlist_item(first.id, stop_loss=141)
    assert updated.stop_loss == 141
    assert store.update_watchlist_item(999, stop_loss=1) is None

    store.delete_watchlist_item(first.id)
    store.delete_watchlist_item(first.id)
    assert [item.ticker for item in store.list_watchlist()] == ["TD.TO"]


def test_listings_return_copies() -> None:
    store = MemoryStore()
    item = store.add_portfolio_item(ticker="RY.TO", shares=50, avg_cost=142.3, current_price=147.85)
    listed = store.list_portfolio()[0]
    listed.shares = 0
    assert store.list_portfolio()[0].shares == 50
    assert item.id == 1


def test_trade_defaults_and_alert_flags() -> None:
    store = MemoryStore()
    trade = store.add_trade(type="BUY", ticker="RY.TO", shares=50, price=142.3, date="2025-12-15")
    assert trade.fees == 6.95

    first = store.add_alert(ticker="RY.TO", signal_type="BUY", message="Breakout")
    store.add_alert(ticker="ENB.TO", signal_type="BUY", message="Yield", urgency="low")
    assert first.urgency == "medium"
    store.mark_alert_read(first.id)
    assert {a.id: a.is_read for a in store.list_alerts()}[first.id] is True
    store.mark_all_alerts_read()
    assert all(a.is_read for a in store.list_alerts())
    store.clear_alerts()
    assert store.list_alerts() == []


def test_chat_messages_read_oldest_first() -> None:
    store = MemoryStore()
    store.add_chat_message("user", "hi")
    store.add_chat_message("assistant", "hello")
    assert [m.role for m in store.list_chat_messages()] == ["user", "assistant"]
    store.clear_chat_messages()
    assert store.list_chat_messages() == []


def test_settings_default_lazily_and_update_partially() -> None:
    store = MemoryStore(default_settings=AccountSettings(account_size=50000.0))
    settings = store.get_settings()
    assert settings.account_size == 50000.0
    assert settings.risk_percentage == 2.0
    assert settings.analysis_interval == 60

    updated = store.update_settings(risk_percentage=1.0)
    assert updated.account_size == 50000.0
    assert store.get_settings().risk_percentage == 1.0
