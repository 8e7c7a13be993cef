"""Enums and constants for the leave core."""

from __future__ import annotations

import enum


# ── Leave ───────────────────────────────────────────────────────────

class LeaveStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
    cancelled = "cancelled"


# Statuses that contribute to leave totals
COUNTED_STATUSES = frozenset({LeaveStatus.pending, LeaveStatus.approved})


class YearDirection(str, enum.Enum):
    prev = "prev"
    next = "next"


# ── Misc constants ──────────────────────────────────────────────────

ALL_USERS = "all"                 # filter_by_user sentinel
SATURDAY = 5                      # date.weekday()
SUNDAY = 6
WEEKEND_DAYS = frozenset({SATURDAY, SUNDAY})
MONTHS_PER_YEAR = 12
DATE_FORMAT = "%Y-%m-%d"
