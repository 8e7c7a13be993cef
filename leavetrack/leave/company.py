"""Company-wide leave view — multi-employee records with capability flags.

Capability flags (``can_edit``, ``can_approve``, ``can_delete``) are derived
on every read from the live permission source, so a permission change is
visible on the next read without rebuilding anything. Reads never mutate the
underlying ``LeaveRequestStore``; mutations are delegated to it.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from leavetrack.common.constants import ALL_USERS
from leavetrack.common.exceptions import ForbiddenException
from leavetrack.config import settings
from leavetrack.leave.calculations import history_statistics, summary
from leavetrack.leave.filters import apply_filters
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

logger = logging.getLogger(__name__)

PermissionSource = Union[Permission, Callable[[], Permission]]


class CompanyLeaveStore:
    """Permission-aware view over every employee's leave requests."""

    def __init__(
        self,
        store: LeaveRequestStore,
        *,
        users: Iterable[Employee] = (),
        permissions: Optional[PermissionSource] = None,
        leave_types: Optional[Iterable[LeaveType]] = None,
    ) -> None:
        self._store = store
        self._users: dict[str, Employee] = {user.id: user for user in users}
        self._permissions: PermissionSource = permissions if permissions is not None else Permission()
        self._leave_types = list(leave_types) if leave_types is not None else default_leave_types()
        self.selected_user: str = ALL_USERS

    # ─────────────────────────────────────────────────────────────────
    # Permissions
    # ─────────────────────────────────────────────────────────────────

    @property
    def permissions(self) -> Permission:
        """The caller's current permission snapshot."""
        source = self._permissions
        return source() if callable(source) else source

    def set_permissions(self, permissions: PermissionSource) -> None:
        self._permissions = permissions
        logger.debug("Permission source replaced")

    @property
    def has_manage_permission(self) -> bool:
        return self.permissions.manage_leaves

    @property
    def has_view_permission(self) -> bool:
        return self.permissions.view_leaves

    def require_manage_permission(self) -> None:
        """Raise ForbiddenException unless the caller may manage leaves."""
        if not self.has_manage_permission:
            raise ForbiddenException("Managing leave requests requires the manage_leaves permission.")

    # ─────────────────────────────────────────────────────────────────
    # Directory / catalog
    # ─────────────────────────────────────────────────────────────────

    @property
    def users(self) -> list[Employee]:
        return list(self._users.values())

    def get_user(self, user_id: str) -> Optional[Employee]:
        return self._users.get(user_id)

    @property
    def leave_types(self) -> list[LeaveType]:
        return list(self._leave_types)

    @property
    def store(self) -> LeaveRequestStore:
        return self._store

    # ─────────────────────────────────────────────────────────────────
    # Composition / reads
    # ─────────────────────────────────────────────────────────────────

    def _compose(self, leave: LeaveRequest, permission: Permission) -> CompanyLeaveRequest:
        can_manage = permission.manage_leaves
        # Records may already be composed; copy only the base fields
        base = {name: getattr(leave, name) for name in LeaveRequest.model_fields}
        return CompanyLeaveRequest(
            **base,
            user=self._users.get(leave.user_id),
            can_edit=can_manage,
            can_approve=can_manage,
            can_delete=can_manage,
        )

    def _compose_all(self, leaves: Iterable[LeaveRequest]) -> list[CompanyLeaveRequest]:
        permission = self.permissions
        return [self._compose(leave, permission) for leave in leaves]

    @property
    def leaves(self) -> list[CompanyLeaveRequest]:
        """Every request, composed with owner and current flags."""
        return self._compose_all(self._store.leaves)

    def filter_by_user(self, selected_user: Optional[str] = None) -> list[CompanyLeaveRequest]:
        """Requests of ``selected_user`` (defaults to ``self.selected_user``).

        ``"all"`` returns the whole collection; order is insertion order.
        """
        selected = self.selected_user if selected_user is None else selected_user
        if selected == ALL_USERS:
            return self.leaves
        return self._compose_all(self._store.leaves_for_user(selected))

    def history(self, filters: LeaveHistoryFilters) -> list[CompanyLeaveRequest]:
        """Filtered records; ``search`` also matches employee name and email."""
        return self._compose_all(apply_filters(self._store.leaves, filters, self._users))

    def statistics(self, filters: Optional[LeaveHistoryFilters] = None) -> LeaveHistoryStats:
        leaves = self._store.history(filters, self._users)
        return history_statistics(leaves, self._leave_types)

    def summary_for(
        self,
        user_id: str,
        allowance: Optional[Union[Decimal, int, float]] = None,
    ) -> LeaveSummary:
        """Balance figures for one employee."""
        if allowance is None:
            allowance = settings.DEFAULT_ALLOWANCE
        return summary(self._store.leaves_for_user(user_id), self._leave_types, allowance)

    def summaries(
        self,
        allowance: Optional[Union[Decimal, int, float]] = None,
    ) -> dict[str, LeaveSummary]:
        """Per-employee summaries for everyone in the directory."""
        return {user_id: self.summary_for(user_id, allowance) for user_id in self._users}

    # ─────────────────────────────────────────────────────────────────
    # Mutations (delegated)
    # ─────────────────────────────────────────────────────────────────

    def _composed(self, leave: Optional[LeaveRequest]) -> Optional[CompanyLeaveRequest]:
        if leave is None:
            return None
        return self._compose(leave, self.permissions)

    def add_leave(
        self,
        payload: Union[LeaveRequestCreate, Mapping[str, Any]],
    ) -> CompanyLeaveRequest:
        return self._compose(self._store.create(payload), self.permissions)

    def update_leave(
        self, leave_id: str, *, expected_version: Optional[int] = None, **changes: Any,
    ) -> Optional[CompanyLeaveRequest]:
        return self._composed(
            self._store.update(leave_id, expected_version=expected_version, **changes)
        )

    def delete_leave(
        self, leave_id: str, *, expected_version: Optional[int] = None,
    ) -> Optional[CompanyLeaveRequest]:
        return self._composed(self._store.remove(leave_id, expected_version=expected_version))

    def approve_leave(
        self, leave_id: str, *, expected_version: Optional[int] = None,
    ) -> Optional[CompanyLeaveRequest]:
        return self._composed(self._store.approve(leave_id, expected_version=expected_version))

    def reject_leave(
        self, leave_id: str, *, expected_version: Optional[int] = None,
    ) -> Optional[CompanyLeaveRequest]:
        return self._composed(self._store.reject(leave_id, expected_version=expected_version))

    def revoke_leave(
        self, leave_id: str, *, expected_version: Optional[int] = None,
    ) -> Optional[CompanyLeaveRequest]:
        return self._composed(self._store.revoke(leave_id, expected_version=expected_version))
