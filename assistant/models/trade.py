"""Trade model — immutable record of one executed position."""

import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Trade(SQLModel, table=True):
    __tablename__ = "trade"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    session_id: str = Field(foreign_key="trading_session.id", index=True)
    side: str  # "Long" or "Short"
    margin: float = Field(default=0.0, ge=0)
    roi: float = 0.0  # percent
    profit_loss: float = 0.0
    comment: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
