"""
Unit tests for error capture policy and persistence
"""

import pytest
from unittest.mock import AsyncMock
from uuid import uuid4

from src.app.services.error_capture import build_error_log, capture_error, should_capture
from src.app.services.redaction import REDACTED
from src.domain.entities import Principal, PrincipalRole


@pytest.mark.parametrize("status,expected", [
    (500, True), (503, True), (403, True), (404, True), (429, True),
    (400, False), (401, False), (409, False), (451, False), (200, False),
])
def test_should_capture(status, expected):
    assert should_capture(status) is expected


def test_build_error_log_redacts_and_attributes():
    principal = Principal(user_id=uuid4(), tenant_id=uuid4(), role=PrincipalRole.employee)
    try:
        raise RuntimeError("connect postgresql://app:s3cret@db/prod failed")
    except RuntimeError as exc:
        error_log = build_error_log(
            request_id="req-1",
            method="GET",
            path="/api/v1/tasks",
            status=500,
            message=str(exc),
            principal=principal,
            exc=exc,
            meta={"headers": {"authorization": "Bearer abc"}},
        )

    assert error_log.tenant_id == principal.tenant_id
    assert error_log.user_id == principal.user_id
    assert error_log.error_name == "RuntimeError"
    assert "s3cret" not in error_log.message
    assert "s3cret" not in error_log.stack
    assert error_log.meta["headers"]["authorization"] == REDACTED


@pytest.mark.asyncio
async def test_capture_error_persists_captured_status(mock_uow):
    mock_uow.error_logs.create = AsyncMock()
    error_log = build_error_log("req-1", "GET", "/api/v1/x", 404, "Not found")

    assert await capture_error(mock_uow, error_log) is True
    mock_uow.error_logs.create.assert_awaited_once_with(error_log)
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_capture_error_skips_uncaptured_status(mock_uow):
    mock_uow.error_logs.create = AsyncMock()

    assert await capture_error(mock_uow, build_error_log("r", "GET", "/", 400, "bad")) is False
    mock_uow.error_logs.create.assert_not_called()


@pytest.mark.asyncio
async def test_capture_failure_is_swallowed(mock_uow):
    mock_uow.error_logs.create = AsyncMock(side_effect=RuntimeError("db down"))

    assert await capture_error(mock_uow, build_error_log("r", "GET", "/", 500, "boom")) is False
