"""Shared fixtures: record factories and an in-memory database."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import assistant.models  # noqa: F401
from assistant.models.trade import Trade
from assistant.models.trading_session import TradingSession

BASE_TIME = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_session():
    """Factory for TradingSession records; ``minutes`` offsets created_at."""

    def _make(name="BTC 5 Minute", user_id="user-1", minutes=0, **kwargs):
        created = BASE_TIME + timedelta(minutes=minutes)
        return TradingSession(
            name=name,
            user_id=user_id,
            initial_capital=kwargs.pop("initial_capital", 1000.0),
            current_capital=kwargs.pop("current_capital", 1050.0),
            created_at=created,
            updated_at=created,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_trade():
    def _make(session, profit_loss=0.0, margin=100.0, roi=0.0, minutes=0, side="Long", comment=None):
        return Trade(
            session_id=session.id,
            side=side,
            margin=margin,
            roi=roi,
            profit_loss=profit_loss,
            comment=comment,
            created_at=BASE_TIME + timedelta(minutes=minutes),
        )

    return _make


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    with Session(engine) as session:
        yield session
