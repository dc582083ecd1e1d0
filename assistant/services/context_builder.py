"""Context builder — bounded snapshot of a user's trading data for prompting."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Sequence

from assistant.models.trade import Trade
from assistant.models.trading_session import TradingSession
from assistant.services.aggregator import AggregateStats, aggregate
from assistant.services.errors import InvalidOwnership, SessionNotFound

logger = logging.getLogger(__name__)

RECENT_SESSIONS_LIMIT = 5
RECENT_TRADES_LIMIT = 10


@dataclass(frozen=True)
class TradingContext:
    """Immutable prompt context.

    sessions/trades hold JSON-ready copies of the (possibly truncated) records;
    stats and the totals always cover the full input.
    """

    user_id: str
    sessions: tuple[dict, ...]
    trades: tuple[dict, ...]
    stats: AggregateStats
    total_sessions: int
    current_date: datetime
    focus_session: dict | None = None


def _newest_first(records):
    return sorted(records, key=lambda r: r.created_at, reverse=True)


def _trade_view(trade: Trade, session_names: dict[str, str]) -> dict:
    view = trade.model_dump(mode="json")
    view["session_name"] = session_names.get(trade.session_id)
    return view


def _check_ownership(
    user_id: str,
    sessions: Sequence[TradingSession],
    trades: Sequence[Trade],
) -> None:
    foreign = [s.id for s in sessions if s.user_id != user_id]
    if foreign:
        logger.error(f"Context for user {user_id} received foreign sessions: {foreign}")
        raise InvalidOwnership(f"{len(foreign)} session(s) not owned by the requesting user")

    owned_ids = {s.id for s in sessions}
    orphaned = [t.id for t in trades if t.session_id not in owned_ids]
    if orphaned:
        logger.error(f"Context for user {user_id} received trades outside owned sessions: {orphaned}")
        raise InvalidOwnership(f"{len(orphaned)} trade(s) not owned by the requesting user")


def build_context(
    user_id: str,
    sessions: Sequence[TradingSession],
    trades: Sequence[Trade],
    focus_session_id: str | None = None,
    recent_sessions_limit: int = RECENT_SESSIONS_LIMIT,
    recent_trades_limit: int = RECENT_TRADES_LIMIT,
    now: datetime | None = None,
) -> TradingContext:
    """Assemble a TradingContext for one user.

    Without focus_session_id the most recent sessions and trades are kept for
    display, while stats are computed over every trade. With focus_session_id
    the context covers exactly that session and all of its trades.

    Raises:
        InvalidOwnership: a session or trade does not belong to user_id.
        SessionNotFound: focus_session_id is not among the user's sessions.
    """
    _check_ownership(user_id, sessions, trades)
    current_date = now or datetime.now(timezone.utc)
    session_names = {s.id: s.name for s in sessions}

    if focus_session_id is not None:
        focus = next((s for s in sessions if s.id == focus_session_id), None)
        if focus is None:
            raise SessionNotFound(f"Session {focus_session_id} not found")
        session_trades = _newest_first(t for t in trades if t.session_id == focus_session_id)
        return TradingContext(
            user_id=user_id,
            sessions=(focus.model_dump(mode="json"),),
            trades=tuple(_trade_view(t, session_names) for t in session_trades),
            stats=aggregate(session_trades),
            total_sessions=1,
            current_date=current_date,
            focus_session=focus.model_dump(mode="json"),
        )

    recent_sessions = _newest_first(sessions)[:recent_sessions_limit]
    recent_trades = _newest_first(trades)[:recent_trades_limit]
    return TradingContext(
        user_id=user_id,
        sessions=tuple(s.model_dump(mode="json") for s in recent_sessions),
        trades=tuple(_trade_view(t, session_names) for t in recent_trades),
        stats=aggregate(trades),
        total_sessions=len(sessions),
        current_date=current_date,
    )
