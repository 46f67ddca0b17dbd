from datetime import datetime

import pytest

from fxjournal.core.entities.analytics import TimeWindow
from fxjournal.core.use_cases.time_window import window_cutoff


def test_week_starts_at_midnight_seven_days_back():
    assert window_cutoff(TimeWindow.WEEK, datetime(2025, 1, 10, 12, 30)) == datetime(2025, 1, 3)


def test_week_crosses_year_boundary():
    assert window_cutoff(TimeWindow.WEEK, datetime(2025, 1, 3, 8, 0)) == datetime(2024, 12, 27)


def test_cutoff_ignores_seconds_and_microseconds():
    assert window_cutoff(TimeWindow.WEEK, datetime(2025, 1, 10, 23, 59, 59, 999999)) == datetime(2025, 1, 3)


def test_month_keeps_day_of_month():
    assert window_cutoff(TimeWindow.MONTH, datetime(2025, 6, 15, 9, 0)) == datetime(2025, 5, 15)


def test_month_clamps_to_last_valid_day():
    assert window_cutoff(TimeWindow.MONTH, datetime(2025, 3, 31)) == datetime(2025, 2, 28)
    assert window_cutoff(TimeWindow.MONTH, datetime(2024, 3, 31, 17, 45)) == datetime(2024, 2, 29)
    assert window_cutoff(TimeWindow.MONTH, datetime(2025, 5, 31)) == datetime(2025, 4, 30)


def test_month_from_january_goes_to_previous_december():
    assert window_cutoff(TimeWindow.MONTH, datetime(2025, 1, 10, 12, 0)) == datetime(2024, 12, 10)


def test_year_handles_leap_day():
    assert window_cutoff(TimeWindow.YEAR, datetime(2024, 2, 29, 18, 0)) == datetime(2023, 2, 28)
    assert window_cutoff(TimeWindow.YEAR, datetime(2025, 7, 4)) == datetime(2024, 7, 4)


def test_all_has_no_cutoff():
    assert window_cutoff(TimeWindow.ALL, datetime(2025, 1, 10)) is None


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("WEEK", TimeWindow.WEEK),
        ("month", TimeWindow.MONTH),
        ("1Y", TimeWindow.YEAR),
        ("1w", TimeWindow.WEEK),
        ("All", TimeWindow.ALL),
        (TimeWindow.MONTH, TimeWindow.MONTH),
    ],
)
def test_parse_accepts_names_and_short_labels(raw, expected):
    assert TimeWindow.parse(raw) is expected


def test_parse_rejects_unknown_window():
    with pytest.raises(ValueError, match="Unknown time window"):
        TimeWindow.parse("QUARTER")
