from datetime import date, datetime, timedelta
from typing import Iterable, List, Set, Union

from .errors import InvalidRange
from .models import Holiday

DateLike = Union[date, datetime]


def as_date(value: DateLike) -> date:
    """Drop any time-of-day component."""
    if isinstance(value, datetime):
        return value.date()
    return value


def is_weekend(d: date) -> bool:
    return d.weekday() >= 5


def eligible_days(start: DateLike, end: DateLike, holidays: Iterable[DateLike] = ()) -> List[date]:
    """Working days in [start, end], excluding Saturdays, Sundays and holidays.

    An empty list is a valid answer; callers treat it as "cannot schedule".
    """
    start, end = as_date(start), as_date(end)
    if end < start:
        raise InvalidRange(start, end)
    closed: Set[date] = {as_date(h) for h in holidays}
    days: List[date] = []
    cur = start
    while cur <= end:
        if not is_weekend(cur) and cur not in closed:
            days.append(cur)
        cur += timedelta(days=1)
    return days


def _same_day_in(year: int, d: date):
    try:
        return d.replace(year=year)
    except ValueError:
        # Feb 29 outside a leap year
        return None


def expand_holidays(holidays: Iterable, start: DateLike, end: DateLike) -> Set[date]:
    """Concrete closed dates for [start, end].

    Accepts plain dates or Holiday records; a recurring holiday closes its
    month/day in every year the range touches.
    """
    start, end = as_date(start), as_date(end)
    out: Set[date] = set()
    for h in holidays:
        if not isinstance(h, Holiday):
            out.add(as_date(h))
            continue
        d = as_date(h.date)
        if not h.recurring:
            out.add(d)
            continue
        for year in range(start.year, end.year + 1):
            cand = _same_day_in(year, d)
            if cand is not None and start <= cand <= end:
                out.add(cand)
    return out
