"""Leave module — calculator, aggregation, request lifecycle, company view."""

from leavetrack.leave.calculations import (
    calculate_leave_days,
    history_statistics,
    leave_days,
    resolve_leave_type,
    summary,
)
from leavetrack.leave.company import CompanyLeaveStore
from leavetrack.leave.schemas import (
    CompanyLeaveRequest,
    Employee,
    LeaveHistoryFilters,
    LeaveHistoryStats,
    LeaveRequest,
    LeaveRequestCreate,
    LeaveSummary,
    LeaveType,
    Permission,
    default_leave_types,
)
from leavetrack.leave.service import LeaveRequestStore

__all__ = [
    "CompanyLeaveRequest",
    "CompanyLeaveStore",
    "Employee",
    "LeaveHistoryFilters",
    "LeaveHistoryStats",
    "LeaveRequest",
    "LeaveRequestCreate",
    "LeaveRequestStore",
    "LeaveSummary",
    "LeaveType",
    "Permission",
    "calculate_leave_days",
    "default_leave_types",
    "history_statistics",
    "leave_days",
    "resolve_leave_type",
    "summary",
]
