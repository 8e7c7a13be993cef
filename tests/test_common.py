"""Tests for common utilities — exception problem bodies and settings."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from leavetrack.common.exceptions import (
    BASE_ERROR_URI,
    ConflictError,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)
from leavetrack.config import Settings, configure_logging
from leavetrack.leave.schemas import LeaveRequestCreate


class TestProblemDetail:

    def test_not_found(self):
        body = NotFoundException("LeaveRequest", "lr-9").to_problem_detail("/leaves/lr-9")
        assert body == {
            "type": f"{BASE_ERROR_URI}/not-found",
            "title": "LeaveRequest Not Found",
            "status": 404,
            "detail": "LeaveRequest with id 'lr-9' does not exist.",
            "instance": "/leaves/lr-9",
        }

    def test_validation_includes_errors(self):
        body = ValidationException({"end_date": ["Too early."]}).to_problem_detail()
        assert body["status"] == 422
        assert body["errors"] == {"end_date": ["Too early."]}
        assert "instance" not in body

    def test_conflict_mentions_versions(self):
        exc = ConflictError("LeaveRequest", "lr-1", expected=1, actual=3)
        assert exc.status_code == 409
        assert "version 3" in exc.detail
        assert exc.errors == {"version": ["Expected 1, found 3."]}

    def test_forbidden_default_detail(self):
        exc = ForbiddenException()
        assert exc.status_code == 403
        assert str(exc) == exc.detail


class TestFromPydantic:

    def test_field_errors_collected(self):
        with pytest.raises(ValidationError) as caught:
            LeaveRequestCreate.model_validate({"user_id": "u1"})
        exc = ValidationException.from_pydantic(caught.value)
        assert {"leave_type", "start_date", "end_date"} <= set(exc.errors)

    def test_model_level_error_uses_root_key(self):
        with pytest.raises(ValidationError) as caught:
            LeaveRequestCreate.model_validate({
                "user_id": "u1",
                "leave_type": {"id": "1", "name": "Vacation"},
                "start_date": "2026-03-05",
                "end_date": "2026-03-01",
            })
        exc = ValidationException.from_pydantic(caught.value)
        assert list(exc.errors) == ["__root__"]


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DEFAULT_ALLOWANCE", raising=False)
        s = Settings(_env_file=None)
        assert s.DEFAULT_ALLOWANCE == 20
        assert s.MAX_LEAVE_SPAN_DAYS == 365

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_ALLOWANCE", "25.5")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        s = Settings(_env_file=None)
        assert str(s.DEFAULT_ALLOWANCE) == "25.5"
        assert s.log_level_value == logging.DEBUG

    def test_unknown_log_level_falls_back_to_info(self):
        assert Settings(LOG_LEVEL="chatty", _env_file=None).log_level_value == logging.INFO

    def test_configure_logging_runs(self):
        configure_logging()
