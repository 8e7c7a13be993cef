"""Common module — shared utilities for the leave core."""

from leavetrack.common.constants import (
    ALL_USERS,
    COUNTED_STATUSES,
    DATE_FORMAT,
    MONTHS_PER_YEAR,
    WEEKEND_DAYS,
    LeaveStatus,
    YearDirection,
)
from leavetrack.common.dates import (
    add_months,
    dates_equal,
    days_in_month,
    is_weekend,
    iter_dates,
    parse_iso_date,
    working_days,
)
from leavetrack.common.exceptions import (
    AppException,
    ConflictError,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)

__all__ = [
    # Constants / Enums
    "LeaveStatus",
    "YearDirection",
    "ALL_USERS",
    "COUNTED_STATUSES",
    "DATE_FORMAT",
    "MONTHS_PER_YEAR",
    "WEEKEND_DAYS",
    # Dates
    "add_months",
    "dates_equal",
    "days_in_month",
    "is_weekend",
    "iter_dates",
    "parse_iso_date",
    "working_days",
    # Exceptions
    "AppException",
    "ConflictError",
    "ForbiddenException",
    "NotFoundException",
    "ValidationException",
]
