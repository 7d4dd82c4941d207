"""
Summary stats - headline win/loss figures for a trade list.
"""
import math
from typing import Iterable

from loguru import logger

from trade_analytics.metrics.primitives import (
    average_rr,
    classify,
    mean,
    qualifying_trades,
    safe_divide,
    win_rate,
)
from trade_analytics.models import Trade, TradeStats


def compute_trade_stats(trades: Iterable[Trade]) -> TradeStats:
    """
    Compute TradeStats over the qualifying trades of a list.

    Breakeven trades count toward total_trades but are neither wins nor
    losses, so they do not move win_rate. avg_loss is reported as a
    positive magnitude.

    Args:
        trades: Trade records, already filtered by the caller

    Returns:
        TradeStats; all-zero for an empty or fully open list
    """
    participating = qualifying_trades(trades)
    if not participating:
        return TradeStats()

    win_pnls = [t.pnl for t in participating if classify(t) == "win"]
    loss_pnls = [t.pnl for t in participating if classify(t) == "loss"]
    pnls = [t.pnl for t in participating]

    total = math.fsum(pnls)
    gross_profit = math.fsum(win_pnls)
    gross_loss = abs(math.fsum(loss_pnls))

    stats = TradeStats(
        total_trades=len(participating),
        win_count=len(win_pnls),
        loss_count=len(loss_pnls),
        breakeven_count=len(participating) - len(win_pnls) - len(loss_pnls),
        win_rate=win_rate(len(win_pnls), len(loss_pnls)),
        total_pnl=total,
        avg_pnl=total / len(participating),
        avg_win=mean(win_pnls),
        avg_loss=gross_loss / len(loss_pnls) if loss_pnls else 0.0,
        profit_factor=safe_divide(gross_profit, gross_loss),
        avg_rr=average_rr(participating),
        best_trade=max(pnls),
        worst_trade=min(pnls),
    )

    logger.debug(
        f"Trade stats: {stats.total_trades} trades, "
        f"win rate {stats.win_rate:.1f}%, total P&L {stats.total_pnl:+.2f}"
    )
    return stats
