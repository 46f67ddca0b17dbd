from pydantic import BaseModel, Field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Union


class TradeOutcome(str, Enum):
    WIN = "WIN"
    LOSS = "LOSS"
    BREAKEVEN = "BREAKEVEN"
    OPEN = "OPEN"


class OutcomeSummary(BaseModel):
    """
    Journal-list counters. total_trades excludes open entries.
    """
    total_trades: int
    wins: int
    losses: int
    breakevens: int
    open: int
    win_rate: int  # whole percent


class DaySummary(BaseModel):
    """
    Calendar cell: every journal entry opened on `day`.
    """
    day: date
    entry_ids: List[Union[int, str]] = Field(default_factory=list)
    outcomes: Dict[TradeOutcome, int] = Field(
        default_factory=lambda: {outcome: 0 for outcome in TradeOutcome}
    )
    net_pnl: Decimal = Decimal("0")
