from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Union
from fxjournal.core.entities.outcome import OutcomeSummary, TradeOutcome
from fxjournal.core.entities.trade import TradeRecord

def classify_outcome(pnl: Optional[Decimal], tolerance: Union[Decimal, str, int] = 0) -> TradeOutcome:
    """
    WIN / LOSS when pnl leaves the [-tolerance, +tolerance] band, BREAKEVEN inside it.
    tolerance=0 is the exact rule used by the equity engine.
    """
    if pnl is None:
        return TradeOutcome.OPEN
    band = abs(Decimal(str(tolerance)))
    if pnl > band:
        return TradeOutcome.WIN
    if pnl < -band:
        return TradeOutcome.LOSS
    return TradeOutcome.BREAKEVEN


def summarize_outcomes(trades: Iterable[TradeRecord], tolerance: Union[Decimal, str, int] = 0) -> OutcomeSummary:
    counts = {outcome: 0 for outcome in TradeOutcome}
    for t in trades:
        counts[classify_outcome(t.pnl, tolerance)] += 1

    wins = counts[TradeOutcome.WIN]
    losses = counts[TradeOutcome.LOSS]
    breakevens = counts[TradeOutcome.BREAKEVEN]
    total = wins + losses + breakevens
    win_rate = 0
    if total > 0:
        # half-up, so 62.5% shows as 63
        win_rate = int((Decimal(wins * 100) / Decimal(total)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    return OutcomeSummary(
        total_trades=total,
        wins=wins,
        losses=losses,
        breakevens=breakevens,
        open=counts[TradeOutcome.OPEN],
        win_rate=win_rate,
    )
