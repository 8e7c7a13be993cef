"""Planner schemas — month descriptors and day cells for calendar grids."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from leavetrack.leave.schemas import LeaveRequest


class MonthDescriptor(BaseModel):
    """One month of a planning year: its first day and every date in it."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    days: tuple[dt.date, ...]


class CalendarDay(BaseModel):
    """A single cell of a month grid.

    ``leaves`` is left empty here; overlaying requests is up to the caller.
    """

    date: dt.date
    is_current_month: bool = True
    is_weekend: bool = False
    is_today: bool = False
    leaves: list[LeaveRequest] = Field(default_factory=list)
