"""Leave-history filtering over in-memory request collections."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional, TypeVar

from leavetrack.leave.schemas import Employee, LeaveHistoryFilters, LeaveRequest

_R = TypeVar("_R", bound=LeaveRequest)


def _matches_search(
    request: LeaveRequest,
    needle: str,
    employee: Optional[Employee],
) -> bool:
    haystack = [request.reason or "", request.leave_type.name]
    if employee is not None:
        haystack.extend([employee.name, employee.email or ""])
    return any(needle in value.lower() for value in haystack)


def matches(
    request: LeaveRequest,
    filters: LeaveHistoryFilters,
    employee: Optional[Employee] = None,
) -> bool:
    """
    True when ``request`` satisfies every set field of ``filters``.

    * ``year`` / ``month`` match against the start date.
    * ``search`` is a case-insensitive substring match on the reason, the
      leave type name and, when known, the employee's name and email.
    """
    if filters.status is not None and request.status != filters.status:
        return False
    if filters.leave_type_id is not None and request.leave_type.id != filters.leave_type_id:
        return False
    if filters.user_id is not None and request.user_id != filters.user_id:
        return False
    if filters.year is not None and request.start_date.year != filters.year:
        return False
    if filters.month is not None and request.start_date.month != filters.month:
        return False
    if filters.search:
        return _matches_search(request, filters.search.strip().lower(), employee)
    return True


def apply_filters(
    requests: Iterable[_R],
    filters: LeaveHistoryFilters,
    employees: Optional[Mapping[str, Employee]] = None,
) -> list[_R]:
    """Filter ``requests`` in order. ``employees`` maps user id → Employee."""
    employees = employees or {}
    return [
        request
        for request in requests
        if matches(request, filters, employees.get(request.user_id))
    ]
