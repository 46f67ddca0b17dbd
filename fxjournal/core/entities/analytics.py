"""
Analytics Entities for fxjournal

Value objects returned by the equity & performance engine.
They are rebuilt from scratch on every call and never persisted.
"""
from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from fxjournal.core.entities.trade import TradeRecord


_SHORT_LABELS = {"1W": "WEEK", "1M": "MONTH", "1Y": "YEAR"}


class TimeWindow(str, Enum):
    WEEK = "WEEK"
    MONTH = "MONTH"
    YEAR = "YEAR"
    ALL = "ALL"

    @classmethod
    def parse(cls, value) -> "TimeWindow":
        """Accepts window names in any case and the short labels 1W/1M/1Y/All."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().upper()
        key = _SHORT_LABELS.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown time window: {value!r}") from None


class EquityPoint(BaseModel):
    """
    One point of the equity curve. Blank labels are thinned out for display.
    """
    label: str
    value: Decimal


class AnalyticsResult(BaseModel):
    """
    Overall balance figures plus window-scoped win/loss counters and curve.
    """
    window: TimeWindow = TimeWindow.ALL
    start_balance: Decimal
    current_balance: Decimal
    net_profit: Decimal
    growth_percentage: Decimal

    # Scoped to the selected window
    total_trades: int
    wins: int
    losses: int
    breakevens: int = 0
    win_rate_percentage: Decimal

    equity_curve: Optional[List[EquityPoint]] = None  # None when fewer than 2 points

    class Config:
        json_schema_extra = {
            "example": {
                "window": "ALL",
                "start_balance": "1000",
                "current_balance": "1060",
                "net_profit": "60",
                "growth_percentage": "6.00",
                "total_trades": 3,
                "wins": 2,
                "losses": 1,
                "breakevens": 0,
                "win_rate_percentage": "66.66666666666666666666666667",
                "equity_curve": [
                    {"label": "Start", "value": "1000"},
                    {"label": "1/3", "value": "1050"},
                    {"label": "2/3", "value": "1030"},
                    {"label": "3/3", "value": "1060"},
                ],
            }
        }

    @property
    def has_chart(self) -> bool:
        return self.equity_curve is not None


class AnalyticsRequest(BaseModel):
    """
    Ad-hoc computation over caller-supplied trades (no data source involved).
    """
    trades: List[TradeRecord] = Field(default_factory=list)
    starting_balance: Optional[Decimal] = None
    window: TimeWindow = TimeWindow.ALL
    now: Optional[datetime] = None
