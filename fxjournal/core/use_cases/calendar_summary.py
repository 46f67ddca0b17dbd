from datetime import date
from typing import Dict, Iterable
from fxjournal.core.entities.outcome import DaySummary
from fxjournal.core.entities.trade import TradeRecord
from fxjournal.core.use_cases.outcome_classifier import classify_outcome

def build_month_calendar(trades: Iterable[TradeRecord], year: int, month: int) -> Dict[date, DaySummary]:
    """
    Group journal entries of one month by the day they were opened.
    Outcomes use the exact rule; net_pnl sums closed entries only.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}")

    days: Dict[date, DaySummary] = {}
    for t in trades:
        if t.opened_at is None:
            continue
        if t.opened_at.year != year or t.opened_at.month != month:
            continue

        day = t.opened_at.date()
        summary = days.get(day)
        if summary is None:
            summary = days[day] = DaySummary(day=day)

        summary.entry_ids.append(t.id)
        summary.outcomes[classify_outcome(t.pnl)] += 1
        if t.pnl is not None:
            summary.net_pnl += t.pnl

    return dict(sorted(days.items()))
