"""Calendar grid builder for planning views.

A ``CalendarGrid`` holds a reference date; its twelve month descriptors
are rebuilt (and cached) per reference date rather than patched when the
user moves between years.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from functools import lru_cache
from typing import Callable, Optional, Union

from leavetrack.common.constants import MONTHS_PER_YEAR, YearDirection
from leavetrack.common.dates import add_months, dates_equal, days_in_month, is_weekend
from leavetrack.planner.schemas import CalendarDay, MonthDescriptor

logger = logging.getLogger(__name__)

Clock = Callable[[], Union[date, datetime]]


def month_grid(year: int) -> list[MonthDescriptor]:
    """Twelve month descriptors for ``year``, January first."""
    return [
        MonthDescriptor(date=date(year, month, 1), days=tuple(days_in_month(year, month)))
        for month in range(1, MONTHS_PER_YEAR + 1)
    ]


@lru_cache(maxsize=32)
def _months_for(reference_date: date) -> tuple[MonthDescriptor, ...]:
    return tuple(month_grid(reference_date.year))


class CalendarGrid:
    """Year planner state: a reference date plus derived month/day grids."""

    def __init__(
        self,
        reference_date: Optional[date] = None,
        *,
        clock: Clock = date.today,
    ) -> None:
        self._clock = clock
        self._reference_date = reference_date or self._today()

    def _today(self) -> date:
        now = self._clock()
        return now.date() if isinstance(now, datetime) else now

    @property
    def reference_date(self) -> date:
        return self._reference_date

    def set_reference_date(self, reference_date: date) -> None:
        self._reference_date = reference_date

    @property
    def months(self) -> tuple[MonthDescriptor, ...]:
        return _months_for(self._reference_date)

    def day_grid(self, month_index: int) -> list[CalendarDay]:
        """Day cells for month ``month_index`` (0 = January).

        An index outside 0-11 yields an empty grid.
        """
        if not 0 <= month_index < MONTHS_PER_YEAR:
            return []

        today = self._clock()
        return [
            CalendarDay(
                date=day,
                is_current_month=True,
                is_weekend=is_weekend(day),
                is_today=dates_equal(day, today),
            )
            for day in self.months[month_index].days
        ]

    def navigate_year(self, direction: Union[YearDirection, str]) -> date:
        """Move the reference date one year back ("prev") or forward ("next")."""
        direction = YearDirection(direction)
        step = MONTHS_PER_YEAR if direction == YearDirection.next else -MONTHS_PER_YEAR
        self._reference_date = add_months(self._reference_date, step)
        logger.debug("Planner moved to %s", self._reference_date.isoformat())
        return self._reference_date
