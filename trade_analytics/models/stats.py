"""Aggregate models produced by the analytics calculators."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from trade_analytics.models.trade import TradeDirection, TradeEmotion


class TradeStats(BaseModel):
    """Headline performance figures for a set of trades."""

    model_config = ConfigDict(from_attributes=True, ser_json_inf_nan="strings")

    total_trades: int = 0
    win_count: int = 0
    loss_count: int = 0
    breakeven_count: int = 0
    win_rate: float = 0.0
    total_pnl: float = 0.0
    avg_pnl: float = 0.0
    avg_win: float = 0.0
    avg_loss: float = 0.0
    profit_factor: float = 0.0
    avg_rr: float = 0.0
    best_trade: float = 0.0
    worst_trade: float = 0.0


class EquityCurvePoint(BaseModel):
    model_config = {"from_attributes": True}

    date: date
    cumulative_pnl: float
    trade_count: int = 0


class DrawdownPoint(BaseModel):
    model_config = {"from_attributes": True}

    date: date
    drawdown: float = Field(ge=0.0)
    drawdown_pct: float = 0.0


class WeeklyPnl(BaseModel):
    model_config = {"from_attributes": True}

    week_start: date
    pnl: float = 0.0
    trade_count: int = 0
    win_rate: float = 0.0


class MonthlyReturn(BaseModel):
    model_config = {"from_attributes": True}

    month: str
    pnl: float = 0.0
    trade_count: int = 0
    win_rate: float = 0.0


class BucketStats(BaseModel):
    """Per-bucket subset of TradeStats shared by every categorical breakdown."""

    model_config = {"from_attributes": True}

    trade_count: int = 0
    win_count: int = 0
    loss_count: int = 0
    win_rate: float = 0.0
    total_pnl: float = 0.0
    avg_pnl: float = 0.0


class DayOfWeekStats(BucketStats):
    day: int = Field(ge=0, le=6)
    day_name: str


class HourOfDayStats(BucketStats):
    hour: int = Field(ge=0, le=23)


class DirectionStats(BucketStats):
    direction: TradeDirection
    avg_rr: float = 0.0
    best_trade: float = 0.0
    worst_trade: float = 0.0


class EmotionStats(BucketStats):
    emotion: TradeEmotion


class SetupStats(BucketStats):
    setup: str


class PairStats(BucketStats):
    pair: str


class MistakeStats(BucketStats):
    mistake: str

    @computed_field
    @property
    def count(self) -> int:
        return self.trade_count


class TagStats(BucketStats):
    tag: str


class RiskRewardBucket(BaseModel):
    model_config = {"from_attributes": True}

    bucket: str
    lower: Optional[float] = None
    upper: Optional[float] = None
    count: int = 0
    win_count: int = 0
    win_rate: float = 0.0


class TradeHeatmapDay(BaseModel):
    model_config = {"from_attributes": True}

    date: date
    pnl: float = 0.0
    trade_count: int = 0


class PortfolioSummary(BaseModel):
    model_config = {"from_attributes": True}

    total_pnl: float = 0.0
    open_positions: int = 0
    closed_positions: int = 0

    max_drawdown: float = 0.0
    max_drawdown_pct: float = 0.0
    current_drawdown: float = 0.0

    current_streak: int = 0
    longest_win_streak: int = 0
    longest_loss_streak: int = 0

    first_trade_date: Optional[date] = None
    last_trade_date: Optional[date] = None
    active_days: int = 0


class AnalyticsReport(BaseModel):
    """Every calculator's output for one trade list, as a single payload."""

    model_config = ConfigDict(from_attributes=True, ser_json_inf_nan="strings")

    stats: TradeStats
    portfolio: PortfolioSummary
    equity_curve: list[EquityCurvePoint] = []
    drawdown_curve: list[DrawdownPoint] = []
    weekly_pnl: list[WeeklyPnl] = []
    monthly_returns: list[MonthlyReturn] = []
    day_of_week: list[DayOfWeekStats] = []
    hour_of_day: list[HourOfDayStats] = []
    direction: list[DirectionStats] = []
    emotion: list[EmotionStats] = []
    setup: list[SetupStats] = []
    mistakes: list[MistakeStats] = []
    tags: list[TagStats] = []
    pairs: list[PairStats] = []
    rr_distribution: list[RiskRewardBucket] = []
    heatmap: list[TradeHeatmapDay] = []
