"""Leave day calculator and balance aggregation.

Business logic:
  - Working days exclude Saturday and Sunday
  - Half-day flags deduct 0.5 at the start and/or end of the range
  - A single day flagged half at both ends counts 0.5
  - Only pending and approved requests contribute to totals
  - Only approved leave of a deductible type reduces the allowance
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from leavetrack.common.constants import LeaveStatus
from leavetrack.common.dates import working_days
from leavetrack.leave.schemas import (
    LeaveHistoryStats,
    LeaveRequest,
    LeaveSummary,
    LeaveType,
)

logger = logging.getLogger(__name__)

HALF_DAY = Decimal("0.5")
ZERO = Decimal("0")


# ─────────────────────────────────────────────────────────────────────
# Leave days
# ─────────────────────────────────────────────────────────────────────


def resolve_leave_type(
    request: LeaveRequest,
    leave_types: Iterable[LeaveType],
) -> Optional[LeaveType]:
    """Find the catalog entry for ``request`` by id, or ``None``."""
    type_id = request.leave_type.id
    return next((lt for lt in leave_types if lt.id == type_id), None)


def calculate_leave_days(
    request: LeaveRequest,
    leave_types: Iterable[LeaveType],
) -> Optional[Decimal]:
    """Leave days for ``request``, or ``None`` when its type is unknown."""
    if resolve_leave_type(request, leave_types) is None:
        return None

    same_day = request.start_date == request.end_date
    if same_day and request.is_half_day_start and request.is_half_day_end:
        return HALF_DAY

    # Half-day flags deduct even when the boundary day is a weekend
    days = Decimal(working_days(request.start_date, request.end_date))
    if request.is_half_day_start:
        days -= HALF_DAY
    if request.is_half_day_end:
        days -= HALF_DAY
    return max(days, ZERO)


def leave_days(
    request: LeaveRequest,
    leave_types: Iterable[LeaveType],
) -> Decimal:
    """Leave days for ``request``; an unknown leave type counts as 0."""
    days = calculate_leave_days(request, leave_types)
    if days is None:
        logger.warning(
            "Leave type %s of request %s not in catalog; counting 0 days",
            request.leave_type.id, request.id,
        )
        return ZERO
    return days


# ─────────────────────────────────────────────────────────────────────
# Aggregation
# ─────────────────────────────────────────────────────────────────────


def _is_deductible(request: LeaveRequest, leave_types: Sequence[LeaveType]) -> bool:
    leave_type = resolve_leave_type(request, leave_types)
    return leave_type is not None and leave_type.deductible


def summary(
    requests: Iterable[LeaveRequest],
    leave_types: Iterable[LeaveType],
    allowance: Decimal | int | float,
) -> LeaveSummary:
    """Reduce ``requests`` into balance figures against ``allowance``.

    ``pending`` is informational and is not subtracted from ``remaining``;
    non-deductible usage never reduces the allowance.
    """
    catalog = list(leave_types)
    allowance = Decimal(str(allowance))

    pending = ZERO
    deductible_used = ZERO
    non_deductible_used = ZERO

    for request in requests:
        if request.status == LeaveStatus.pending:
            pending += leave_days(request, catalog)
        elif request.status == LeaveStatus.approved:
            if _is_deductible(request, catalog):
                deductible_used += leave_days(request, catalog)
            else:
                non_deductible_used += leave_days(request, catalog)

    return LeaveSummary(
        allowance=allowance,
        pending=pending,
        deductible=deductible_used,
        non_deductible=non_deductible_used,
        used=deductible_used + non_deductible_used,
        remaining=allowance - deductible_used,
    )


def history_statistics(
    requests: Iterable[LeaveRequest],
    leave_types: Iterable[LeaveType],
) -> LeaveHistoryStats:
    """Count requests per status and total their leave days.

    Unlike ``summary`` every status contributes to ``total_days``; this is
    the figure shown under a history listing, not a balance.
    """
    catalog = list(leave_types)
    stats = LeaveHistoryStats()
    for request in requests:
        stats.total += 1
        setattr(stats, request.status.value, getattr(stats, request.status.value) + 1)
        stats.total_days += leave_days(request, catalog)
    return stats
