"""
Calendar-period P&L: ISO weeks and months.
"""
from datetime import date
from typing import Iterable

from trade_analytics.metrics.primitives import bucket_fields, qualifying_trades, week_start
from trade_analytics.models import MonthlyReturn, Trade, WeeklyPnl


def compute_weekly_pnl(trades: Iterable[Trade]) -> list[WeeklyPnl]:
    """
    Sum P&L per ISO week (Monday start).

    Only weeks containing at least one qualifying trade appear. Callers
    wanting a trailing window slice the tail of the result.

    Args:
        trades: Trade records

    Returns:
        WeeklyPnl list sorted ascending by week_start
    """
    weeks: dict[date, list[Trade]] = {}
    for trade in qualifying_trades(trades):
        weeks.setdefault(week_start(trade.trade_date), []).append(trade)

    result = []
    for start, members in sorted(weeks.items()):
        fields = bucket_fields(members)
        result.append(
            WeeklyPnl(
                week_start=start,
                pnl=fields["total_pnl"],
                trade_count=fields["trade_count"],
                win_rate=fields["win_rate"],
            )
        )
    return result


def compute_monthly_returns(trades: Iterable[Trade]) -> list[MonthlyReturn]:
    months: dict[str, list[Trade]] = {}
    for trade in qualifying_trades(trades):
        months.setdefault(trade.trade_date.strftime("%Y-%m"), []).append(trade)

    result = []
    for month, members in sorted(months.items()):
        fields = bucket_fields(members)
        result.append(
            MonthlyReturn(
                month=month,
                pnl=fields["total_pnl"],
                trade_count=fields["trade_count"],
                win_rate=fields["win_rate"],
            )
        )
    return result
