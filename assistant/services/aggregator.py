"""Trade statistics: count, net P/L, win rate, average ROI, margin used."""

from dataclasses import asdict, dataclass
from typing import Iterable

from assistant.models.trade import Trade


@dataclass(frozen=True)
class AggregateStats:
    total_trades: int = 0
    net_profit_loss: float = 0.0
    winning_trades: int = 0
    losing_trades: int = 0
    win_rate_percent: float = 0.0
    total_margin_used: float = 0.0
    average_roi_percent: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


def aggregate(trades: Iterable[Trade]) -> AggregateStats:
    """Reduce trades to summary statistics in a single pass.

    Break-even trades (profit_loss == 0) count toward total_trades only.
    """
    total = 0
    net = 0.0
    wins = 0
    losses = 0
    margin = 0.0
    roi_sum = 0.0

    for trade in trades:
        total += 1
        net += trade.profit_loss
        margin += trade.margin
        roi_sum += trade.roi
        if trade.profit_loss > 0:
            wins += 1
        elif trade.profit_loss < 0:
            losses += 1

    if total == 0:
        return AggregateStats()

    return AggregateStats(
        total_trades=total,
        net_profit_loss=net,
        winning_trades=wins,
        losing_trades=losses,
        win_rate_percent=wins / total * 100,
        total_margin_used=margin,
        average_roi_percent=roi_sum / total,
    )
