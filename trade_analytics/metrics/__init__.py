from trade_analytics.metrics.primitives import (
    classify,
    safe_divide,
    qualifying_trades,
    win_rate,
)
from trade_analytics.metrics.summary import compute_trade_stats
from trade_analytics.metrics.equity import (
    compute_equity_curve,
    compute_drawdown_curve,
    compute_max_drawdown,
    drawdown_from_equity,
)
from trade_analytics.metrics.streaks import (
    compute_longest_win_streak,
    compute_longest_loss_streak,
    compute_current_streak,
)
from trade_analytics.metrics.periods import compute_weekly_pnl, compute_monthly_returns
from trade_analytics.metrics.breakdowns import (
    compute_day_of_week_stats,
    compute_hour_of_day_stats,
    compute_direction_stats,
    compute_emotion_stats,
    compute_setup_stats,
    compute_pair_stats,
    compute_mistake_stats,
    compute_tag_stats,
)
from trade_analytics.metrics.distribution import compute_rr_distribution
from trade_analytics.metrics.heatmap import compute_trade_heatmap
from trade_analytics.metrics.portfolio import compute_portfolio_summary
from trade_analytics.metrics.report import build_analytics_report

__all__ = [
    "classify",
    "safe_divide",
    "qualifying_trades",
    "win_rate",
    "compute_trade_stats",
    "compute_equity_curve",
    "compute_drawdown_curve",
    "compute_max_drawdown",
    "drawdown_from_equity",
    "compute_longest_win_streak",
    "compute_longest_loss_streak",
    "compute_current_streak",
    "compute_weekly_pnl",
    "compute_monthly_returns",
    "compute_day_of_week_stats",
    "compute_hour_of_day_stats",
    "compute_direction_stats",
    "compute_emotion_stats",
    "compute_setup_stats",
    "compute_pair_stats",
    "compute_mistake_stats",
    "compute_tag_stats",
    "compute_rr_distribution",
    "compute_trade_heatmap",
    "compute_portfolio_summary",
    "build_analytics_report",
]
