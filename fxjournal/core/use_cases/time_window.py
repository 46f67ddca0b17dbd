import calendar
from datetime import datetime, timedelta
from typing import Optional

from fxjournal.core.entities.analytics import TimeWindow


def window_cutoff(window: TimeWindow, now: datetime) -> Optional[datetime]:
    """
    Start of the window relative to `now`, or None for ALL.

    Calendar-relative: the cutoff is local midnight of the day 7 days,
    one month or one year before `now`. MONTH and YEAR keep the day of
    month where it exists and fall back to the last valid day otherwise
    (31 Mar -> 28/29 Feb).
    """
    window = TimeWindow.parse(window)
    if window is TimeWindow.WEEK:
        return _start_of_day(now - timedelta(days=7))
    if window is TimeWindow.MONTH:
        return _start_of_day(_shift_months(now, -1))
    if window is TimeWindow.YEAR:
        return _start_of_day(_shift_months(now, -12))
    return None


def _start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def _shift_months(moment: datetime, months: int) -> datetime:
    index = moment.year * 12 + (moment.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return moment.replace(year=year, month=month, day=min(moment.day, last_day))
