"""
Metric primitives - outcome classification and zero-safe arithmetic.

Every calculator in this package builds on these helpers so that sparse
input (open trades, missing P&L, no losses) resolves to 0 or the
profit-factor infinity sentinel instead of raising.
"""
import math
from datetime import date, datetime, time, timezone
from typing import Any, Iterable, Literal, Optional, Sequence

from trade_analytics.models import Trade

Outcome = Literal["win", "loss", "breakeven"]


def classify(trade: Trade) -> Optional[Outcome]:
    """
    Classify a trade by the sign of its P&L.

    Returns:
        "win", "loss" or "breakeven", or None when pnl is unknown
    """
    if trade.pnl is None:
        return None
    if trade.pnl > 0:
        return "win"
    if trade.pnl < 0:
        return "loss"
    return "breakeven"


def is_qualifying(trade: Trade) -> bool:
    """
    A trade enters P&L aggregates only once it is not open and has a pnl.

    A NaN or infinite pnl is treated the same as a missing one.
    """
    return trade.pnl is not None and math.isfinite(trade.pnl) and trade.status != "open"


def qualifying_trades(trades: Iterable[Trade]) -> list[Trade]:
    return [t for t in trades if is_qualifying(t)]


def usable_rr(trade: Trade) -> Optional[float]:
    """rr_ratio, or None when it is missing or NaN. Infinite ratios are kept."""
    rr = trade.rr_ratio
    if rr is None or math.isnan(rr):
        return None
    return rr


def average_rr(trades: Iterable[Trade]) -> float:
    """Mean of the finite rr_ratio values; 0.0 when there are none."""
    ratios = []
    for trade in trades:
        rr = usable_rr(trade)
        if rr is not None and not math.isinf(rr):
            ratios.append(rr)
    return mean(ratios)


def safe_divide(numerator: float, denominator: float) -> float:
    """
    Divide, resolving a zero denominator without raising.

    Args:
        numerator: Dividend
        denominator: Divisor

    Returns:
        The quotient; math.inf for a positive numerator over zero;
        0.0 for any other numerator over zero
    """
    if denominator == 0:
        return math.inf if numerator > 0 else 0.0
    return numerator / denominator


def win_rate(wins: int, losses: int) -> float:
    """Percentage (0-100) of decided trades that won."""
    decided = wins + losses
    if decided == 0:
        return 0.0
    return 100.0 * wins / decided


def mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return math.fsum(values) / len(values)


def total_pnl(trades: Iterable[Trade]) -> float:
    # fsum keeps the total independent of input order
    return math.fsum(t.pnl for t in trades if t.pnl is not None)


def bucket_fields(trades: Sequence[Trade]) -> dict[str, Any]:
    """
    Summary fields shared by every bucketed breakdown.

    Args:
        trades: Qualifying trades belonging to one bucket

    Returns:
        Dict with trade_count, win_count, loss_count, win_rate,
        total_pnl and avg_pnl
    """
    outcomes = [classify(t) for t in trades]
    wins = outcomes.count("win")
    losses = outcomes.count("loss")
    pnl = total_pnl(trades)
    count = len(trades)
    return {
        "trade_count": count,
        "win_count": wins,
        "loss_count": losses,
        "win_rate": win_rate(wins, losses),
        "total_pnl": pnl,
        "avg_pnl": pnl / count if count else 0.0,
    }


def to_naive_utc(ts: datetime) -> datetime:
    """Convert an aware timestamp to naive UTC. Naive timestamps are already taken as UTC."""
    if ts.tzinfo is not None:
        ts = ts.astimezone(timezone.utc).replace(tzinfo=None)
    return ts


def sort_timestamp(trade: Trade) -> datetime:
    """Chronological key: closed_at, falling back to midnight of trade_date, in naive UTC."""
    if trade.closed_at is None:
        return datetime.combine(trade.trade_date, time.min)
    return to_naive_utc(trade.closed_at)


def week_start(day: date) -> date:
    """Monday of the ISO week containing day."""
    return date.fromordinal(day.toordinal() - day.weekday())
