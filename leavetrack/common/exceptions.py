"""Custom exceptions and RFC 7807 Problem Detail bodies."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import ValidationError

BASE_ERROR_URI = "https://leavetrack.dev/errors"


# ── Exception hierarchy ─────────────────────────────────────────────

class AppException(Exception):
    """Base for all application exceptions → RFC 7807 JSON."""

    def __init__(
        self,
        status_code: int,
        error_type: str,
        title: str,
        detail: str,
        errors: Optional[dict[str, Any]] = None,
    ) -> None:
        self.status_code = status_code
        self.error_type = error_type
        self.title = title
        self.detail = detail
        self.errors = errors
        super().__init__(detail)

    def to_problem_detail(self, instance: Optional[str] = None) -> dict[str, Any]:
        """Render the exception as an RFC 7807 problem body."""
        body: dict[str, Any] = {
            "type": f"{BASE_ERROR_URI}/{self.error_type}",
            "title": self.title,
            "status": self.status_code,
            "detail": self.detail,
        }
        if instance:
            body["instance"] = instance
        if self.errors:
            body["errors"] = self.errors
        return body


class NotFoundException(AppException):
    """404 — entity not found."""

    def __init__(self, entity_type: str, entity_id: Any) -> None:
        super().__init__(
            status_code=404,
            error_type="not-found",
            title=f"{entity_type} Not Found",
            detail=f"{entity_type} with id '{entity_id}' does not exist.",
        )


class ConflictError(AppException):
    """409 — stale write against a newer record version."""

    def __init__(self, entity_type: str, entity_id: Any, expected: int, actual: int) -> None:
        super().__init__(
            status_code=409,
            error_type="conflict",
            title="Conflict",
            detail=(
                f"{entity_type} '{entity_id}' is at version {actual}, "
                f"expected {expected}."
            ),
            errors={"version": [f"Expected {expected}, found {actual}."]},
        )


class ForbiddenException(AppException):
    """403 — insufficient permissions."""

    def __init__(
        self,
        detail: str = "You do not have permission to perform this action.",
    ) -> None:
        super().__init__(
            status_code=403,
            error_type="forbidden",
            title="Forbidden",
            detail=detail,
        )


class ValidationException(AppException):
    """422 — business-logic validation failures."""

    def __init__(self, errors: dict[str, list[str]]) -> None:
        super().__init__(
            status_code=422,
            error_type="validation-error",
            title="Validation Error",
            detail="One or more fields failed validation.",
            errors=errors,
        )

    @classmethod
    def from_pydantic(cls, exc: ValidationError) -> "ValidationException":
        """Collapse pydantic error entries into a field → messages mapping."""
        field_errors: dict[str, list[str]] = {}
        for err in exc.errors():
            loc = err.get("loc", ())
            name = ".".join(str(p) for p in loc) if loc else "__root__"
            field_errors.setdefault(name, []).append(err.get("msg", "Invalid value"))
        return cls(field_errors)
