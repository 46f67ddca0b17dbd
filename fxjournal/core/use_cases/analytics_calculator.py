from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional, Union

from fxjournal.core.entities.analytics import AnalyticsResult, EquityPoint, TimeWindow
from fxjournal.core.entities.trade import TradeRecord, to_local_naive
from fxjournal.core.use_cases.equity_curve import (
    DEFAULT_MAX_LABELS,
    build_equity_curve,
    downsample_labels,
    reconstruct_baseline,
    split_at_cutoff,
)
from fxjournal.core.use_cases.time_window import window_cutoff
from fxjournal.core.use_cases.trade_filter import closed_trades_by_settlement

ZERO = Decimal("0")
HUNDRED = Decimal("100")
MIN_CURVE_POINTS = 2


def compute_analytics(
    trades: Iterable[TradeRecord],
    starting_balance: Optional[Union[Decimal, int, float, str]],
    window: Union[TimeWindow, str],
    now: datetime,
    *,
    max_labels: Optional[int] = DEFAULT_MAX_LABELS,
) -> AnalyticsResult:
    """
    Equity & performance snapshot for one account.

    Balance, profit and growth always cover every closed trade. Win/loss
    counters and the equity curve only cover trades settled inside `window`,
    with the curve starting from the balance reached before the window opened.
    Pure: the same inputs and `now` give the same result.
    """
    window = TimeWindow.parse(window)
    start = _as_decimal(starting_balance)
    now = to_local_naive(now)

    closed = closed_trades_by_settlement(trades)
    pre, in_window = split_at_cutoff(closed, window_cutoff(window, now))

    net_profit = sum((t.pnl for t in closed), ZERO)
    growth = (net_profit / start) * HUNDRED if start > 0 else ZERO

    wins = sum(1 for t in in_window if t.pnl > 0)
    losses = sum(1 for t in in_window if t.pnl < 0)
    total = len(in_window)
    win_rate = (Decimal(wins) / Decimal(total)) * HUNDRED if total > 0 else ZERO

    curve = build_equity_curve(in_window, reconstruct_baseline(start, pre))
    if len(curve) < MIN_CURVE_POINTS:
        curve = None
    elif max_labels is not None:
        labels = downsample_labels([p.label for p in curve], max_labels)
        curve = [EquityPoint(label=label, value=p.value) for label, p in zip(labels, curve)]

    return AnalyticsResult(
        window=window,
        start_balance=start,
        current_balance=start + net_profit,
        net_profit=net_profit,
        growth_percentage=growth,
        total_trades=total,
        wins=wins,
        losses=losses,
        breakevens=total - wins - losses,
        win_rate_percentage=win_rate,
        equity_curve=curve,
    )


def _as_decimal(value) -> Decimal:
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        return value
    # 0.1 -> Decimal("0.1"), not the binary expansion
    return Decimal(str(value))
