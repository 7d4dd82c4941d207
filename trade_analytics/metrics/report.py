"""
Analytics report - every calculator over one trade list.
"""
from typing import Iterable, Optional

from loguru import logger

from trade_analytics.metrics.breakdowns import (
    compute_day_of_week_stats,
    compute_direction_stats,
    compute_emotion_stats,
    compute_hour_of_day_stats,
    compute_mistake_stats,
    compute_pair_stats,
    compute_setup_stats,
    compute_tag_stats,
)
from trade_analytics.metrics.distribution import compute_rr_distribution
from trade_analytics.metrics.equity import compute_equity_curve, drawdown_from_equity
from trade_analytics.metrics.heatmap import compute_trade_heatmap
from trade_analytics.metrics.periods import compute_monthly_returns, compute_weekly_pnl
from trade_analytics.metrics.portfolio import compute_portfolio_summary
from trade_analytics.metrics.summary import compute_trade_stats
from trade_analytics.models import AnalyticsReport, Trade


def build_analytics_report(
    trades: Iterable[Trade],
    year: Optional[int] = None,
    month: Optional[int] = None,
) -> AnalyticsReport:
    """
    Run every calculator against the same trade list.

    Args:
        trades: Trade records for one trader
        year: Heatmap year; the heatmap is only built when year and month are given
        month: Heatmap month (1-12)

    Returns:
        AnalyticsReport bundling all aggregates
    """
    trades = list(trades)
    equity_curve = compute_equity_curve(trades)

    heatmap = []
    if year is not None and month is not None:
        heatmap = compute_trade_heatmap(trades, year, month)

    report = AnalyticsReport(
        stats=compute_trade_stats(trades),
        portfolio=compute_portfolio_summary(trades),
        equity_curve=equity_curve,
        drawdown_curve=drawdown_from_equity(equity_curve),
        weekly_pnl=compute_weekly_pnl(trades),
        monthly_returns=compute_monthly_returns(trades),
        day_of_week=compute_day_of_week_stats(trades),
        hour_of_day=compute_hour_of_day_stats(trades),
        direction=compute_direction_stats(trades),
        emotion=compute_emotion_stats(trades),
        setup=compute_setup_stats(trades),
        mistakes=compute_mistake_stats(trades),
        tags=compute_tag_stats(trades),
        pairs=compute_pair_stats(trades),
        rr_distribution=compute_rr_distribution(trades),
        heatmap=heatmap,
    )

    logger.info(
        f"Built analytics report over {len(trades)} trades "
        f"({report.stats.total_trades} qualifying)"
    )
    return report
