"""Leave request store — owns the request collection and its lifecycle.

Lifecycle:
  - create      → pending (unless the payload says otherwise)
  - approve     → approved      (from any state)
  - reject      → rejected      (from any state)
  - revoke      → pending       (from any state)
  - set_status  → any status    (history / bulk views)
  - remove      → gone, no tombstone

Every mutation builds a new tuple and swaps it in, so a snapshot taken
from ``leaves`` never changes underneath its holder. Mutating an unknown
id is a no-op that returns ``None``. Callers with more than one writer
pass ``expected_version`` to get optimistic concurrency.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Iterator, Mapping, Optional, Union

from pydantic import ValidationError

from leavetrack.common.constants import LeaveStatus
from leavetrack.common.exceptions import (
    ConflictError,
    NotFoundException,
    ValidationException,
)
from leavetrack.leave.filters import apply_filters
from leavetrack.leave.schemas import (
    Employee,
    LeaveHistoryFilters,
    LeaveRequest,
    LeaveRequestCreate,
    check_date_range,
)

logger = logging.getLogger(__name__)

# Fields that identify a record; update() refuses to touch them
_IMMUTABLE_FIELDS = frozenset({"id", "created_at", "version"})


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ═════════════════════════════════════════════════════════════════════
# LeaveRequestStore
# ═════════════════════════════════════════════════════════════════════


class LeaveRequestStore:
    """In-memory leave request collection with status transitions."""

    def __init__(
        self,
        leaves: Iterable[LeaveRequest] = (),
        *,
        id_factory: Callable[[], str] = _new_id,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._leaves: tuple[LeaveRequest, ...] = tuple(leaves)
        self._id_factory = id_factory
        self._clock = clock

    # ─────────────────────────────────────────────────────────────────
    # Reads
    # ─────────────────────────────────────────────────────────────────

    @property
    def leaves(self) -> tuple[LeaveRequest, ...]:
        """Current snapshot, in insertion order."""
        return self._leaves

    def __len__(self) -> int:
        return len(self._leaves)

    def __iter__(self) -> Iterator[LeaveRequest]:
        return iter(self._leaves)

    def __contains__(self, leave_id: object) -> bool:
        return any(lr.id == leave_id for lr in self._leaves)

    def get(self, leave_id: str) -> Optional[LeaveRequest]:
        return next((lr for lr in self._leaves if lr.id == leave_id), None)

    def require(self, leave_id: str) -> LeaveRequest:
        """Like ``get`` but raises NotFoundException for unknown ids."""
        leave = self.get(leave_id)
        if leave is None:
            raise NotFoundException("LeaveRequest", leave_id)
        return leave

    def leaves_for_user(self, user_id: str) -> list[LeaveRequest]:
        return [lr for lr in self._leaves if lr.user_id == user_id]

    def history(
        self,
        filters: Optional[LeaveHistoryFilters] = None,
        employees: Optional[Mapping[str, Employee]] = None,
    ) -> list[LeaveRequest]:
        """Filtered view of the collection, insertion order preserved."""
        if filters is None:
            return list(self._leaves)
        return apply_filters(self._leaves, filters, employees)

    # ─────────────────────────────────────────────────────────────────
    # Create
    # ─────────────────────────────────────────────────────────────────

    def create(
        self,
        payload: Union[LeaveRequestCreate, Mapping[str, Any]],
    ) -> LeaveRequest:
        """Add a new request with a fresh id and ``created_at``."""
        if not isinstance(payload, LeaveRequestCreate):
            try:
                payload = LeaveRequestCreate.model_validate(payload)
            except ValidationError as exc:
                raise ValidationException.from_pydantic(exc) from exc

        leave = LeaveRequest(
            id=self._id_factory(),
            created_at=self._clock(),
            **payload.model_dump(exclude={"leave_type"}),
            leave_type=payload.leave_type,
        )
        self._leaves = self._leaves + (leave,)

        logger.info(
            "Created leave request %s for user %s (%s → %s, %s)",
            leave.id, leave.user_id, leave.start_date, leave.end_date,
            leave.status.value,
        )
        return leave

    # ─────────────────────────────────────────────────────────────────
    # Status transitions
    # ─────────────────────────────────────────────────────────────────

    def approve(
        self, leave_id: str, *, expected_version: Optional[int] = None,
    ) -> Optional[LeaveRequest]:
        return self.set_status(leave_id, LeaveStatus.approved, expected_version=expected_version)

    def reject(
        self, leave_id: str, *, expected_version: Optional[int] = None,
    ) -> Optional[LeaveRequest]:
        return self.set_status(leave_id, LeaveStatus.rejected, expected_version=expected_version)

    def revoke(
        self, leave_id: str, *, expected_version: Optional[int] = None,
    ) -> Optional[LeaveRequest]:
        """Reset the request to pending, whatever its current status."""
        return self.set_status(leave_id, LeaveStatus.pending, expected_version=expected_version)

    def set_status(
        self,
        leave_id: str,
        status: Union[LeaveStatus, str],
        *,
        expected_version: Optional[int] = None,
    ) -> Optional[LeaveRequest]:
        """Set ``status`` unconditionally. Re-setting the same status is a no-op."""
        try:
            status = LeaveStatus(status)
        except ValueError as exc:
            raise ValidationException(
                {"status": [f"'{status}' is not a valid leave status."]}
            ) from exc

        current = self._find(leave_id, "set_status", expected_version)
        if current is None:
            return None
        if current.status == status:
            return current

        updated = current.model_copy(
            update={"status": status, "version": current.version + 1},
        )
        self._swap(current, updated)
        logger.info(
            "Leave request %s: %s → %s",
            leave_id, current.status.value, status.value,
        )
        return updated

    # ─────────────────────────────────────────────────────────────────
    # Update / remove
    # ─────────────────────────────────────────────────────────────────

    def update(
        self,
        leave_id: str,
        *,
        expected_version: Optional[int] = None,
        **changes: Any,
    ) -> Optional[LeaveRequest]:
        """Apply a partial update, re-validating the resulting record."""
        blocked = sorted(_IMMUTABLE_FIELDS.intersection(changes))
        if blocked:
            raise ValidationException(
                {name: ["This field cannot be changed."] for name in blocked}
            )
        unknown = sorted(set(changes) - set(LeaveRequest.model_fields))
        if unknown:
            raise ValidationException(
                {name: ["Unknown field."] for name in unknown}
            )

        current = self._find(leave_id, "update", expected_version)
        if current is None:
            return None

        data = current.model_dump()
        data.update(changes)
        try:
            updated = LeaveRequest.model_validate(data)
        except ValidationError as exc:
            raise ValidationException.from_pydantic(exc) from exc
        try:
            check_date_range(updated.start_date, updated.end_date)
        except ValueError as exc:
            raise ValidationException({"end_date": [str(exc)]}) from exc

        if updated == current:
            return current
        updated = updated.model_copy(update={"version": current.version + 1})
        self._swap(current, updated)
        logger.info("Updated leave request %s (%s)", leave_id, ", ".join(sorted(changes)))
        return updated

    def remove(
        self, leave_id: str, *, expected_version: Optional[int] = None,
    ) -> Optional[LeaveRequest]:
        """Delete the request outright. Returns the removed record."""
        current = self._find(leave_id, "remove", expected_version)
        if current is None:
            return None

        self._leaves = tuple(lr for lr in self._leaves if lr.id != leave_id)
        logger.info("Removed leave request %s", leave_id)
        return current

    # ─────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────

    def _find(
        self,
        leave_id: str,
        action: str,
        expected_version: Optional[int],
    ) -> Optional[LeaveRequest]:
        current = self.get(leave_id)
        if current is None:
            logger.debug("%s: leave request %s not found; nothing to do", action, leave_id)
            return None
        if expected_version is not None and current.version != expected_version:
            raise ConflictError("LeaveRequest", leave_id, expected_version, current.version)
        return current

    def _swap(self, current: LeaveRequest, updated: LeaveRequest) -> None:
        self._leaves = tuple(
            updated if lr.id == current.id else lr for lr in self._leaves
        )
