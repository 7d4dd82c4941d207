"""
Portfolio summary - risk, streak and activity figures for the performance sidebar.
"""
from typing import Iterable

from loguru import logger

from trade_analytics.metrics.equity import compute_equity_curve, drawdown_from_equity
from trade_analytics.metrics.primitives import qualifying_trades, total_pnl
from trade_analytics.metrics.streaks import (
    compute_current_streak,
    compute_longest_loss_streak,
    compute_longest_win_streak,
)
from trade_analytics.models import PortfolioSummary, Trade


def compute_portfolio_summary(trades: Iterable[Trade]) -> PortfolioSummary:
    """
    Summarize a trader's full history.

    Open trades are counted in open_positions and widen the
    first/last trade date span; their P&L never enters any figure.
    Drawdown is measured on the daily equity curve.

    Args:
        trades: All of a trader's trade records, open ones included

    Returns:
        PortfolioSummary; all-zero for an empty list
    """
    trades = list(trades)
    closed = qualifying_trades(trades)

    curve = compute_equity_curve(closed)
    drawdowns = drawdown_from_equity(curve)
    deepest = max(drawdowns, key=lambda p: p.drawdown, default=None)
    active_dates = {t.trade_date for t in closed}
    all_dates = [t.trade_date for t in trades]

    summary = PortfolioSummary(
        total_pnl=total_pnl(closed),
        open_positions=sum(1 for t in trades if t.status == "open"),
        closed_positions=len(closed),
        max_drawdown=deepest.drawdown if deepest else 0.0,
        max_drawdown_pct=deepest.drawdown_pct if deepest else 0.0,
        current_drawdown=drawdowns[-1].drawdown if drawdowns else 0.0,
        current_streak=compute_current_streak(closed),
        longest_win_streak=compute_longest_win_streak(closed),
        longest_loss_streak=compute_longest_loss_streak(closed),
        first_trade_date=min(all_dates, default=None),
        last_trade_date=max(all_dates, default=None),
        active_days=len(active_dates),
    )

    logger.debug(
        f"Portfolio summary: {summary.closed_positions} closed, "
        f"{summary.open_positions} open, max drawdown {summary.max_drawdown:.2f}"
    )
    return summary
