import math
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from fxjournal.core.entities.analytics import EquityPoint
from fxjournal.core.entities.trade import TradeRecord

DEFAULT_MAX_LABELS = 8
START_LABEL = "Start"


def split_at_cutoff(
    closed: Sequence[TradeRecord], cutoff: Optional[datetime]
) -> Tuple[List[TradeRecord], List[TradeRecord]]:
    """
    Partition sorted closed trades into (pre, in_window).
    pre: settled strictly before the cutoff. No cutoff means everything is in-window.
    """
    if cutoff is None:
        return [], list(closed)
    pre = [t for t in closed if t.settled_at < cutoff]
    in_window = [t for t in closed if t.settled_at >= cutoff]
    return pre, in_window


def reconstruct_baseline(starting_balance: Decimal, pre: Sequence[TradeRecord]) -> Decimal:
    """Balance at the start of the window: everything realized before it counts."""
    return starting_balance + sum((t.pnl for t in pre), Decimal("0"))


def build_equity_curve(in_window: Sequence[TradeRecord], baseline: Decimal) -> List[EquityPoint]:
    """
    One synthetic "Start" point at the baseline, then one point per trade
    carrying the running balance. Always len(in_window) + 1 points.
    """
    points = [EquityPoint(label=START_LABEL, value=baseline)]
    running_balance = baseline
    for trade in in_window:
        running_balance += trade.pnl
        points.append(EquityPoint(label=settlement_label(trade.settled_at), value=running_balance))
    return points


def settlement_label(moment: datetime) -> str:
    # day/month, no zero padding
    return f"{moment.day}/{moment.month}"


def downsample_labels(labels: Sequence[str], max_labels: int = DEFAULT_MAX_LABELS) -> List[str]:
    """
    Blank out labels so that roughly `max_labels` remain visible.
    First, last and every step-th label survive. Length never changes.
    """
    count = len(labels)
    if max_labels is None or max_labels <= 0 or count <= max_labels:
        return list(labels)

    step = math.ceil(count / max_labels)
    last = count - 1
    return [
        label if (i == 0 or i == last or i % step == 0) else ""
        for i, label in enumerate(labels)
    ]
