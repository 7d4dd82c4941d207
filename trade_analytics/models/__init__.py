from trade_analytics.models.trade import (
    Trade,
    TradeFilter,
    TradeDirection,
    TradeStatus,
    TradeEmotion,
)
from trade_analytics.models.stats import (
    TradeStats,
    EquityCurvePoint,
    DrawdownPoint,
    WeeklyPnl,
    MonthlyReturn,
    BucketStats,
    DayOfWeekStats,
    HourOfDayStats,
    DirectionStats,
    EmotionStats,
    SetupStats,
    PairStats,
    MistakeStats,
    TagStats,
    RiskRewardBucket,
    TradeHeatmapDay,
    PortfolioSummary,
    AnalyticsReport,
)

__all__ = [
    "Trade",
    "TradeFilter",
    "TradeDirection",
    "TradeStatus",
    "TradeEmotion",
    "TradeStats",
    "EquityCurvePoint",
    "DrawdownPoint",
    "WeeklyPnl",
    "MonthlyReturn",
    "BucketStats",
    "DayOfWeekStats",
    "HourOfDayStats",
    "DirectionStats",
    "EmotionStats",
    "SetupStats",
    "PairStats",
    "MistakeStats",
    "TagStats",
    "RiskRewardBucket",
    "TradeHeatmapDay",
    "PortfolioSummary",
    "AnalyticsReport",
]
