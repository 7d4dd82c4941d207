"""
Equity and drawdown curves over daily trading activity.
"""
import math
from datetime import date
from typing import Iterable, Optional, Sequence

from loguru import logger

from trade_analytics.metrics.primitives import qualifying_trades
from trade_analytics.models import DrawdownPoint, EquityCurvePoint, Trade


def _daily_totals(trades: Iterable[Trade]) -> list[tuple[date, float, int]]:
    days: dict[date, list[float]] = {}
    for trade in qualifying_trades(trades):
        days.setdefault(trade.trade_date, []).append(trade.pnl)
    return [(day, math.fsum(pnls), len(pnls)) for day, pnls in sorted(days.items())]


def compute_equity_curve(trades: Iterable[Trade]) -> list[EquityCurvePoint]:
    """
    Cumulative realized P&L, one point per day with qualifying trades.

    Days without trades produce no point; filling date gaps is left to
    whoever draws the chart.

    Args:
        trades: Trade records

    Returns:
        Points in ascending date order
    """
    points: list[EquityCurvePoint] = []
    cumulative = 0.0
    for day, pnl, count in _daily_totals(trades):
        cumulative += pnl
        points.append(EquityCurvePoint(date=day, cumulative_pnl=cumulative, trade_count=count))

    if len(points) < 2:
        logger.debug(f"Equity curve has {len(points)} point(s), too few to chart")
    return points


def drawdown_from_equity(curve: Sequence[EquityCurvePoint]) -> list[DrawdownPoint]:
    """
    Derive the drawdown series from an equity curve.

    The running peak starts at the first point and never decreases, so
    drawdown is never negative and is zero on every new equity high.
    """
    points: list[DrawdownPoint] = []
    peak: Optional[float] = None
    for point in curve:
        peak = point.cumulative_pnl if peak is None else max(peak, point.cumulative_pnl)
        drawdown = peak - point.cumulative_pnl
        points.append(
            DrawdownPoint(
                date=point.date,
                drawdown=drawdown,
                drawdown_pct=100.0 * drawdown / peak if peak > 0 else 0.0,
            )
        )
    return points


def compute_drawdown_curve(trades: Iterable[Trade]) -> list[DrawdownPoint]:
    return drawdown_from_equity(compute_equity_curve(trades))


def compute_max_drawdown(trades: Iterable[Trade]) -> float:
    return max((p.drawdown for p in compute_drawdown_curve(trades)), default=0.0)
