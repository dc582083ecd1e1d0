"""Trade store — per-user access to trading sessions and trades."""

from sqlmodel import Session, select

from assistant.models.trade import Trade
from assistant.models.trading_session import TradingSession


class TradeStore:
    """Every query is scoped to user_id; trades are filtered through their session."""

    def __init__(self, session: Session):
        self.session = session

    def list_sessions(self, user_id: str) -> list[TradingSession]:
        stmt = (
            select(TradingSession)
            .where(TradingSession.user_id == user_id)
            .order_by(TradingSession.created_at.desc())
        )
        return list(self.session.exec(stmt).all())

    def list_trades(self, user_id: str, session_id: str | None = None) -> list[Trade]:
        stmt = (
            select(Trade)
            .join(TradingSession, Trade.session_id == TradingSession.id)
            .where(TradingSession.user_id == user_id)
        )
        if session_id is not None:
            stmt = stmt.where(Trade.session_id == session_id)
        stmt = stmt.order_by(Trade.created_at.desc())
        return list(self.session.exec(stmt).all())

    def get_session(self, session_id: str, user_id: str) -> TradingSession | None:
        stmt = select(TradingSession).where(
            TradingSession.id == session_id,
            TradingSession.user_id == user_id,
        )
        return self.session.exec(stmt).first()
