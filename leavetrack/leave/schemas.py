"""Leave Pydantic v2 schemas — catalog entries, requests, summaries.

Naming conventions:
  - *Create             → input payloads (write)
  - *Summary / *Stats   → derived read models, never stored
  - Employee            → compact user reference embedded in company views
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from leavetrack.common.constants import LeaveStatus
from leavetrack.config import settings


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ═════════════════════════════════════════════════════════════════════
# Embedded / shared
# ═════════════════════════════════════════════════════════════════════


class LeaveType(BaseModel):
    """Leave category. ``deductible`` types reduce the annual allowance."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    name: str
    color: str = "#6B7280"
    deductible: bool = True


class Employee(BaseModel):
    """Minimal employee info embedded in company leave records."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    name: str
    email: Optional[str] = None
    department: Optional[str] = None


class Permission(BaseModel):
    """Capability pair supplied by the identity provider."""

    model_config = ConfigDict(frozen=True)

    view_leaves: bool = False
    manage_leaves: bool = False


def default_leave_types() -> list[LeaveType]:
    """Catalog used when the caller does not supply one."""
    return [
        LeaveType(id="1", name="Vacation", color="#3B82F6", deductible=True),
        LeaveType(id="2", name="Sick Leave", color="#10B981", deductible=False),
        LeaveType(id="3", name="Maternity", color="#8B5CF6", deductible=False),
        LeaveType(id="4", name="Unpaid", color="#6B7280", deductible=False),
    ]


def check_date_range(start_date: date, end_date: date) -> None:
    """Raise ValueError unless [start_date, end_date] is a valid leave range."""
    if start_date > end_date:
        raise ValueError("start_date must be on or before end_date.")
    if (end_date - start_date).days > settings.MAX_LEAVE_SPAN_DAYS:
        raise ValueError(
            f"Leave request cannot span more than {settings.MAX_LEAVE_SPAN_DAYS} days."
        )


# ═════════════════════════════════════════════════════════════════════
# Leave Request — Create
# ═════════════════════════════════════════════════════════════════════


class LeaveRequestCreate(BaseModel):
    """Payload for creating a leave request."""

    user_id: str
    leave_type: LeaveType
    start_date: date = Field(..., description="Leave start date (inclusive)")
    end_date: date = Field(..., description="Leave end date (inclusive)")
    is_half_day_start: bool = False
    is_half_day_end: bool = False
    status: LeaveStatus = LeaveStatus.pending
    reason: Optional[str] = Field(None, max_length=1000)

    @model_validator(mode="after")
    def validate_dates(self) -> "LeaveRequestCreate":
        check_date_range(self.start_date, self.end_date)
        return self


# ═════════════════════════════════════════════════════════════════════
# Leave Request — stored record
# ═════════════════════════════════════════════════════════════════════


class LeaveRequest(BaseModel):
    """Stored leave request. Frozen: the store swaps in updated copies."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    user_id: str
    leave_type: LeaveType
    start_date: date
    end_date: date
    is_half_day_start: bool = False
    is_half_day_end: bool = False
    status: LeaveStatus = LeaveStatus.pending
    reason: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)
    version: int = 1


class CompanyLeaveRequest(LeaveRequest):
    """Leave request enriched with its owner and capability flags."""

    user: Optional[Employee] = None
    can_edit: bool = False
    can_approve: bool = False
    can_delete: bool = False


# ═════════════════════════════════════════════════════════════════════
# Summaries
# ═════════════════════════════════════════════════════════════════════


class LeaveSummary(BaseModel):
    """Balance figures for one employee; recomputed on demand."""

    allowance: Decimal
    pending: Decimal = Decimal("0")
    deductible: Decimal = Decimal("0")
    non_deductible: Decimal = Decimal("0")
    used: Decimal = Decimal("0")
    remaining: Decimal = Decimal("0")


class LeaveHistoryStats(BaseModel):
    """Status counts and total days for a (filtered) leave history."""

    total: int = 0
    approved: int = 0
    pending: int = 0
    rejected: int = 0
    cancelled: int = 0
    total_days: Decimal = Decimal("0")


# ═════════════════════════════════════════════════════════════════════
# Leave History Filters
# ═════════════════════════════════════════════════════════════════════


class LeaveHistoryFilters(BaseModel):
    """Filters for browsing leave history. ``None`` means "any"."""

    status: Optional[LeaveStatus] = None
    leave_type_id: Optional[str] = None
    user_id: Optional[str] = None
    year: Optional[int] = None
    month: Optional[int] = Field(None, ge=1, le=12)
    search: Optional[str] = Field(
        default=None,
        description="Case-insensitive match on reason, employee name or email.",
    )
