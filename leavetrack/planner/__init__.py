"""Planner module — year/month/day grids for leave planning views."""

from leavetrack.planner.schemas import CalendarDay, MonthDescriptor
from leavetrack.planner.service import CalendarGrid, month_grid

__all__ = [
    "CalendarDay",
    "CalendarGrid",
    "MonthDescriptor",
    "month_grid",
]
