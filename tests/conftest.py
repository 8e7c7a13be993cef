"""Shared test fixtures — leave catalog, stores, employees, factories.

Reusable across all test modules (dates, leave, company view, planner).
Everything is in memory; no fixture touches the filesystem or network.
"""

from __future__ import annotations

import itertools
from datetime import date, datetime, timezone
from typing import Callable

import pytest

from leavetrack.common.constants import LeaveStatus
from leavetrack.leave.company import CompanyLeaveStore
from leavetrack.leave.schemas import (
    Employee,
    LeaveRequest,
    LeaveType,
    Permission,
    default_leave_types,
)
from leavetrack.leave.service import LeaveRequestStore

FIXED_NOW = datetime(2026, 2, 20, 9, 30, tzinfo=timezone.utc)

# Reference week used throughout: Mon 2026-02-23 … Sun 2026-03-01
MONDAY = date(2026, 2, 23)
WEDNESDAY = date(2026, 2, 25)
FRIDAY = date(2026, 2, 27)
SATURDAY = date(2026, 2, 28)
SUNDAY = date(2026, 3, 1)
NEXT_MONDAY = date(2026, 3, 2)


# ── Model factories ─────────────────────────────────────────────────

def _make_request(
    *,
    id: str = "lr-x",
    user_id: str = "u1",
    leave_type: LeaveType | None = None,
    start_date: date = MONDAY,
    end_date: date = FRIDAY,
    is_half_day_start: bool = False,
    is_half_day_end: bool = False,
    status: LeaveStatus = LeaveStatus.pending,
    reason: str | None = None,
) -> LeaveRequest:
    return LeaveRequest(
        id=id,
        user_id=user_id,
        leave_type=leave_type or default_leave_types()[0],
        start_date=start_date,
        end_date=end_date,
        is_half_day_start=is_half_day_start,
        is_half_day_end=is_half_day_end,
        status=status,
        reason=reason,
        created_at=FIXED_NOW,
    )


def _make_payload(**overrides) -> dict:
    data = dict(
        user_id="u1",
        leave_type=default_leave_types()[0],
        start_date=MONDAY,
        end_date=FRIDAY,
        reason="Family trip",
    )
    data.update(overrides)
    return data


# ── Catalog ─────────────────────────────────────────────────────────

@pytest.fixture
def leave_types() -> list[LeaveType]:
    return default_leave_types()


@pytest.fixture
def vacation(leave_types) -> LeaveType:
    """Deductible leave type."""
    return leave_types[0]


@pytest.fixture
def sick_leave(leave_types) -> LeaveType:
    """Non-deductible leave type."""
    return leave_types[1]


# ── Stores ──────────────────────────────────────────────────────────

@pytest.fixture
def id_factory() -> Callable[[], str]:
    counter = itertools.count(1)
    return lambda: f"lr-{next(counter)}"


@pytest.fixture
def store(id_factory) -> LeaveRequestStore:
    """Empty store with predictable ids (lr-1, lr-2, …) and a fixed clock."""
    return LeaveRequestStore(id_factory=id_factory, clock=lambda: FIXED_NOW)


@pytest.fixture
def employees() -> list[Employee]:
    return [
        Employee(id="u1", name="John Doe", email="john@company.com", department="Engineering"),
        Employee(id="u2", name="Jane Smith", email="jane@company.com", department="Marketing"),
        Employee(id="u3", name="Mike Johnson", email="mike@company.com", department="Sales"),
    ]


@pytest.fixture
def seeded_store(store, vacation, sick_leave) -> LeaveRequestStore:
    """Store holding four requests across three employees, in this order:

    lr-1  u1  vacation  Mon–Fri          approved
    lr-2  u2  sick      Mon 2026-03-02   pending, half day both ends
    lr-3  u1  sick      Mon–Wed          rejected
    lr-4  u3  vacation  Mon 2026-03-02   pending
    """
    store.create(_make_payload(user_id="u1", status=LeaveStatus.approved, reason="Winter vacation"))
    store.create(_make_payload(
        user_id="u2", leave_type=sick_leave, start_date=NEXT_MONDAY, end_date=NEXT_MONDAY,
        is_half_day_start=True, is_half_day_end=True, reason="Doctor appointment",
    ))
    store.create(_make_payload(
        user_id="u1", leave_type=sick_leave, end_date=WEDNESDAY,
        status=LeaveStatus.rejected, reason="Flu",
    ))
    store.create(_make_payload(
        user_id="u3", start_date=NEXT_MONDAY, end_date=NEXT_MONDAY, reason="Moving house",
    ))
    return store


@pytest.fixture
def manager_permission() -> Permission:
    return Permission(view_leaves=True, manage_leaves=True)


@pytest.fixture
def company(seeded_store, employees, leave_types, manager_permission) -> CompanyLeaveStore:
    return CompanyLeaveStore(
        seeded_store,
        users=employees,
        permissions=manager_permission,
        leave_types=leave_types,
    )
