"""Calendar-day predicates and ranges.

All helpers accept ``date`` or ``datetime`` values and never mutate their
arguments. Weekends are Saturday and Sunday.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator, TypeVar, Union

from leavetrack.common.constants import DATE_FORMAT, WEEKEND_DAYS

DateLike = Union[date, datetime]
_D = TypeVar("_D", date, datetime)

_ONE_DAY = timedelta(days=1)


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def is_weekend(value: DateLike) -> bool:
    return value.weekday() in WEEKEND_DAYS


def iter_dates(start: DateLike, end: DateLike) -> Iterator[date]:
    """Yield every calendar date in the inclusive range [start, end]."""
    current = _as_date(start)
    last = _as_date(end)
    while current <= last:
        yield current
        if current == last:
            break
        current += _ONE_DAY


def days_in_month(year: int, month: int) -> list[date]:
    """Every date of ``month`` (1-12) in ``year``, ascending."""
    _, last_day = calendar.monthrange(year, month)
    return [date(year, month, day) for day in range(1, last_day + 1)]


def add_months(value: _D, months: int) -> _D:
    """Shift ``value`` by ``months``; day overflow rolls into the next month.

    Jan 31 + 1 month is Mar 3 (Mar 2 in a leap year), matching how a
    calendar ``setMonth`` rolls over rather than clamping to month end.
    """
    total = value.month - 1 + months
    year = value.year + total // 12
    month = total % 12 + 1
    return value.replace(year=year, month=month, day=1) + timedelta(days=value.day - 1)


def dates_equal(a: DateLike, b: DateLike) -> bool:
    return _as_date(a) == _as_date(b)


def working_days(start: DateLike, end: DateLike) -> int:
    """Count non-weekend days in [start, end]; an inverted range counts 0."""
    return sum(1 for day in iter_dates(start, end) if not is_weekend(day))
