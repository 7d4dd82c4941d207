"""
Calendar heatmap - per-day P&L for one month.
"""
import math
from datetime import date
from typing import Iterable

from trade_analytics.metrics.primitives import qualifying_trades
from trade_analytics.models import Trade, TradeHeatmapDay


def compute_trade_heatmap(trades: Iterable[Trade], year: int, month: int) -> list[TradeHeatmapDay]:
    """
    Group one month's qualifying trades by day.

    pnl is the plain signed sum for the day, so a renderer can map sign to
    colour and magnitude to intensity without further input.

    Args:
        trades: Trade records
        year: Calendar year
        month: Calendar month (1-12)

    Returns:
        One entry per day with at least one trade, in date order
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in [1, 12], got {month}")

    days: dict[date, list[float]] = {}
    for trade in qualifying_trades(trades):
        day = trade.trade_date
        if day.year == year and day.month == month:
            days.setdefault(day, []).append(trade.pnl)

    return [
        TradeHeatmapDay(date=day, pnl=math.fsum(pnls), trade_count=len(pnls))
        for day, pnls in sorted(days.items())
    ]
