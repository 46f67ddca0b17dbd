"""
Tests for journal-list outcome counters and the monthly calendar.
"""
from datetime import date, datetime
from decimal import Decimal

import pytest

from conftest import make_trade
from fxjournal.core.entities.outcome import TradeOutcome
from fxjournal.core.use_cases.calendar_summary import build_month_calendar
from fxjournal.core.use_cases.outcome_classifier import classify_outcome, summarize_outcomes


@pytest.mark.parametrize(
    "pnl, tolerance, expected",
    [
        (None, 0, TradeOutcome.OPEN),
        (Decimal("0.005"), 0, TradeOutcome.WIN),
        (Decimal("-0.005"), 0, TradeOutcome.LOSS),
        (Decimal("0"), 0, TradeOutcome.BREAKEVEN),
        (Decimal("0.005"), "0.01", TradeOutcome.BREAKEVEN),
        (Decimal("-0.01"), "0.01", TradeOutcome.BREAKEVEN),
        (Decimal("0.02"), "0.01", TradeOutcome.WIN),
        (Decimal("-12.5"), "0.01", TradeOutcome.LOSS),
    ],
)
def test_classify_outcome(pnl, tolerance, expected):
    assert classify_outcome(pnl, tolerance) is expected


def test_summary_excludes_open_trades_from_total():
    day = datetime(2025, 1, 2, 9, 0)
    trades = [
        make_trade(1, 20, day),
        make_trade(2, -5, day),
        make_trade(3, "0.004", day),
        make_trade(4, None, None, opened_at=day),
    ]

    summary = summarize_outcomes(trades, "0.01")

    assert summary.total_trades == 3
    assert (summary.wins, summary.losses, summary.breakevens, summary.open) == (1, 1, 1, 1)
    assert summary.win_rate == 33


def test_summary_win_rate_rounds_half_up():
    day = datetime(2025, 1, 2, 9, 0)
    # 5 wins out of 8 = 62.5%
    trades = [make_trade(i, 1, day) for i in range(5)] + [make_trade(10 + i, -1, day) for i in range(3)]

    assert summarize_outcomes(trades).win_rate == 63


def test_summary_of_nothing():
    summary = summarize_outcomes([])
    assert summary.total_trades == 0
    assert summary.win_rate == 0


def test_calendar_groups_by_open_day_within_month():
    trades = [
        make_trade(1, 50, datetime(2025, 1, 4, 9, 0), opened_at=datetime(2025, 1, 2, 9, 0)),
        make_trade(2, -20, datetime(2025, 1, 2, 18, 0), opened_at=datetime(2025, 1, 2, 14, 0)),
        make_trade(3, None, None, opened_at=datetime(2025, 1, 15, 8, 0)),
        make_trade(4, 10, datetime(2025, 2, 1, 9, 0)),
        make_trade(5, 5, datetime(2024, 1, 2, 9, 0)),
    ]

    days = build_month_calendar(trades, 2025, 1)

    assert list(days) == [date(2025, 1, 2), date(2025, 1, 15)]
    second = days[date(2025, 1, 2)]
    assert second.entry_ids == [1, 2]
    assert second.outcomes[TradeOutcome.WIN] == 1
    assert second.outcomes[TradeOutcome.LOSS] == 1
    assert second.net_pnl == Decimal("30")
    fifteenth = days[date(2025, 1, 15)]
    assert fifteenth.outcomes[TradeOutcome.OPEN] == 1
    assert fifteenth.net_pnl == 0


def test_calendar_skips_entries_without_open_time():
    trade = make_trade(1, 5, None)
    assert build_month_calendar([trade], 2025, 1) == {}


def test_calendar_rejects_invalid_month():
    with pytest.raises(ValueError):
        build_month_calendar([], 2025, 13)
