"""Tests for the session summary generator and chat service."""

import threading
from unittest.mock import AsyncMock, MagicMock

import pytest

from assistant.config import settings
from assistant.services.chat import ChatService
from assistant.services.completion_client import CompletionResult, FailureKind
from assistant.services.errors import InvalidOwnership
from assistant.services.summary import SummaryGenerator
from assistant.utils.constants import CHAT_FALLBACK_TEXT, SUMMARY_FALLBACK_TEXT


def _client(text="Great session!"):
    client = MagicMock()
    client.complete = AsyncMock(return_value=CompletionResult(success=True, text=text))
    return client


@pytest.fixture
def session_with_trades(make_session, make_trade):
    session = make_session(name="BTC 5 Minute")
    trades = [
        make_trade(session, profit_loss=100.0, margin=50.0, roi=20.0, minutes=1, comment="clean breakout"),
        make_trade(session, profit_loss=-50.0, margin=50.0, roi=-10.0, minutes=2, side="Short"),
        make_trade(session, profit_loss=0.0, margin=50.0, roi=0.0, minutes=3),
    ]
    return session, trades


@pytest.mark.asyncio
async def test_summary_unknown_session():
    store = MagicMock()
    store.get_session.return_value = None
    client = _client()

    result = await SummaryGenerator(store, client).summarize("missing", "user-1")

    assert result.success is False
    assert result.failure == FailureKind.SESSION_NOT_FOUND
    store.get_session.assert_called_once_with("missing", "user-1")
    client.complete.assert_not_awaited()


@pytest.mark.asyncio
async def test_summary_prompt_and_budget(session_with_trades):
    session, trades = session_with_trades
    store = MagicMock()
    store.get_session.return_value = session
    store.list_trades.return_value = trades
    client = _client()

    result = await SummaryGenerator(store, client).summarize(session.id, "user-1")

    assert result.text == "Great session!"
    store.list_trades.assert_called_once_with("user-1", session.id)

    args, kwargs = client.complete.call_args
    prompt, user_message = args
    assert user_message is None
    assert kwargs["max_tokens"] == settings.summary_max_tokens
    assert kwargs["max_tokens"] < settings.chat_max_tokens
    assert kwargs["fallback"] == SUMMARY_FALLBACK_TEXT

    assert "- Name: BTC 5 Minute" in prompt
    assert "- Total Trades: 3" in prompt
    assert "- Net P/L: $50.00" in prompt
    assert "- Win Rate: 33.3%" in prompt
    assert "- Total Margin Used: $150.00" in prompt
    assert "clean breakout" in prompt
    for section in (
        "Performance Overview",
        "Key Insights",
        "Psychological Analysis",
        "Risk Assessment",
        "Personalized Recommendations",
    ):
        assert f"**{section}**" in prompt


@pytest.mark.asyncio
async def test_chat_service_builds_prompt_from_store(session_with_trades, make_session):
    session, trades = session_with_trades
    older = make_session(name="ETH Swing", minutes=-60)
    store = MagicMock()
    store.list_sessions.return_value = [session, older]
    store.list_trades.return_value = trades
    client = _client("Here is your answer")

    result = await ChatService(store, client).reply("How am I doing?", "user-1", older.id)

    assert result.text == "Here is your answer"
    store.list_sessions.assert_called_once_with("user-1")
    store.list_trades.assert_called_once_with("user-1")

    args, kwargs = client.complete.call_args
    prompt, user_message = args
    assert user_message == "How am I doing?"
    assert kwargs["max_tokens"] == settings.chat_max_tokens
    assert kwargs["fallback"] == CHAT_FALLBACK_TEXT
    assert "- Total Sessions: 2" in prompt
    assert "- Total Trades: 3" in prompt
    assert "currently viewing the session: ETH Swing" in prompt


@pytest.mark.asyncio
async def test_chat_service_rejects_foreign_records(make_session):
    store = MagicMock()
    store.list_sessions.return_value = [make_session(user_id="user-2")]
    store.list_trades.return_value = []
    client = _client()

    with pytest.raises(InvalidOwnership):
        await ChatService(store, client).reply("hi", "user-1")
    client.complete.assert_not_awaited()


@pytest.mark.asyncio
async def test_store_queries_run_off_the_event_loop(session_with_trades):
    session, trades = session_with_trades
    loop_thread = threading.get_ident()
    seen = []

    def record(result):
        def call(*args):
            seen.append(threading.get_ident())
            return result
        return call

    store = MagicMock()
    store.get_session.side_effect = record(session)
    store.list_sessions.side_effect = record([session])
    store.list_trades.side_effect = record(trades)

    await SummaryGenerator(store, _client()).summarize(session.id, "user-1")
    await ChatService(store, _client()).reply("hi", "user-1")

    assert len(seen) == 4
    assert loop_thread not in seen
