from typing import Iterable, List
from fxjournal.core.entities.trade import TradeRecord

def closed_trades_by_settlement(trades: Iterable[TradeRecord]) -> List[TradeRecord]:
    """
    Closed trades ordered by settlement time.
    PnL is realized at settlement, so open time is never the ordering key.
    """
    closed = [t for t in trades if t.pnl is not None and t.settled_at is not None]
    # sorted() is stable: ties keep the caller's order
    return sorted(closed, key=lambda t: t.settled_at)


def count_unsettled(trades: Iterable[TradeRecord]) -> int:
    """Closed trades dropped because they carry no settlement time."""
    return sum(1 for t in trades if t.pnl is not None and t.settled_at is None)
