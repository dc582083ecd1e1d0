"""Database models."""

from assistant.models.trading_session import TradingSession
from assistant.models.trade import Trade

__all__ = [
    "TradingSession",
    "Trade",
]
