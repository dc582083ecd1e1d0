"""TradingSession model — a named container of trades owned by one user."""

import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class TradingSession(SQLModel, table=True):
    __tablename__ = "trading_session"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    user_id: str = Field(index=True)
    name: str = Field(index=True)  # e.g. "BTC 5 Minute"
    initial_capital: float = Field(default=0.0, ge=0)
    current_capital: float = Field(default=0.0, ge=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
