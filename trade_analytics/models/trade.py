import json
from datetime import date, datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator

TradeDirection = Literal["long", "short"]
TradeStatus = Literal["open", "closed", "breakeven"]
TradeEmotion = Literal["confident", "neutral", "fearful", "greedy", "revenge"]


class Trade(BaseModel):
    model_config = {"from_attributes": True, "frozen": True}

    id: str
    user_id: Optional[str] = None
    pair: str
    direction: TradeDirection
    entry_price: float = Field(gt=0)
    exit_price: Optional[float] = Field(default=None, gt=0)
    lot_size: float = Field(default=0.01, gt=0)
    stop_loss: Optional[float] = Field(default=None, gt=0)
    take_profit: Optional[float] = Field(default=None, gt=0)
    pnl: Optional[float] = None
    pnl_pips: Optional[float] = None
    rr_ratio: Optional[float] = None
    commission: float = 0.0
    swap: float = 0.0
    status: TradeStatus = "closed"
    trade_date: date
    closed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    emotion: Optional[TradeEmotion] = None
    confidence: Optional[int] = Field(default=None, ge=1, le=5)
    setup: Optional[str] = None
    mistakes: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    notes: Optional[str] = Field(default=None, max_length=2000)
    screenshot_url: Optional[str] = None

    @field_validator("mistakes", "tags", mode="before")
    @classmethod
    def coerce_label_list(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            return json.loads(v) if v.startswith("[") else [v]
        return v

    @field_validator("setup", "emotion", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def to_db_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "pair": self.pair,
            "direction": self.direction,
            "entry_price": self.entry_price,
            "exit_price": self.exit_price,
            "lot_size": self.lot_size,
            "stop_loss": self.stop_loss,
            "take_profit": self.take_profit,
            "pnl": self.pnl,
            "pnl_pips": self.pnl_pips,
            "rr_ratio": self.rr_ratio,
            "commission": self.commission,
            "swap": self.swap,
            "status": self.status,
            "trade_date": self.trade_date.isoformat(),
            "closed_at": self.closed_at.isoformat() if self.closed_at else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "emotion": self.emotion,
            "confidence": self.confidence,
            "setup": self.setup,
            "mistakes": json.dumps(self.mistakes),
            "tags": json.dumps(self.tags),
            "notes": self.notes,
            "screenshot_url": self.screenshot_url,
        }


class TradeFilter(BaseModel):
    """Selection applied by a trade source before trades reach the engine."""

    model_config = {"from_attributes": True}

    status: Optional[TradeStatus] = None
    pair: Optional[str] = None
    direction: Optional[TradeDirection] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None

    def matches(self, trade: Trade) -> bool:
        if self.status is not None and trade.status != self.status:
            return False
        if self.pair is not None and trade.pair != self.pair:
            return False
        if self.direction is not None and trade.direction != self.direction:
            return False
        if self.date_from is not None and trade.trade_date < self.date_from:
            return False
        if self.date_to is not None and trade.trade_date > self.date_to:
            return False
        return True
