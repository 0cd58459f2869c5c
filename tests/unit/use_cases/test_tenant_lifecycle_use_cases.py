"""
Unit tests for Suspend/Restore/Activate Tenant Use Cases
Tests business logic in isolation with mocked dependencies.
"""

import pytest
from unittest.mock import AsyncMock
from uuid import uuid4

from src.app.use_cases.admin import (
    ActivateTenantUseCase,
    RestoreTenantUseCase,
    SuspendTenantUseCase,
)
from src.domain.entities import Tenant
from src.domain.entities.enums import TenantStatus


def make_tenant(mock_uow, status):
    tenant = Tenant(id=uuid4(), name="Test Corp", slug="test-corp", status=status)
    mock_uow.tenants.get_by_id = AsyncMock(return_value=tenant)
    mock_uow.tenants.update = AsyncMock(return_value=tenant)
    mock_uow.audit_events.create = AsyncMock()
    return tenant


@pytest.mark.asyncio
async def test_suspend_tenant_success(mock_uow):
    """Test successful tenant suspension"""
    # Arrange
    tenant = make_tenant(mock_uow, TenantStatus.active)

    # Act
    result = await SuspendTenantUseCase(mock_uow).execute(tenant.id)

    # Assert
    assert result.is_ok()
    response = result.value
    assert response.status == "suspended"
    assert response.previous_status == "active"
    assert response.changed is True

    # Verify tenant status updated
    assert tenant.status == TenantStatus.suspended
    mock_uow.tenants.update.assert_called_once_with(tenant)

    # Verify audit event created
    audit_call = mock_uow.audit_events.create.call_args[0][0]
    assert audit_call.action == "tenant_suspended"
    assert audit_call.event_metadata["previous_status"] == "active"

    # Verify transaction committed
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_suspend_already_suspended_is_idempotent(mock_uow):
    tenant = make_tenant(mock_uow, TenantStatus.suspended)

    result = await SuspendTenantUseCase(mock_uow).execute(tenant.id)

    assert result.is_ok()
    assert result.value.changed is False
    mock_uow.tenants.update.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_suspend_tenant_not_found(mock_uow):
    mock_uow.tenants.get_by_id = AsyncMock(return_value=None)

    result = await SuspendTenantUseCase(mock_uow).execute(uuid4())

    assert result.is_err()
    assert result.error.code == "TENANT_NOT_FOUND"


@pytest.mark.asyncio
async def test_restore_tenant_success(mock_uow):
    tenant = make_tenant(mock_uow, TenantStatus.suspended)

    result = await RestoreTenantUseCase(mock_uow).execute(tenant.id)

    assert result.is_ok()
    assert result.value.status == "active"
    assert tenant.status == TenantStatus.active
    assert mock_uow.audit_events.create.call_args[0][0].action == "tenant_restored"


@pytest.mark.asyncio
async def test_restore_requires_suspended(mock_uow):
    tenant = make_tenant(mock_uow, TenantStatus.inactive)

    result = await RestoreTenantUseCase(mock_uow).execute(tenant.id)

    assert result.is_err()
    assert result.error.code == "TENANT_NOT_SUSPENDED"
    assert tenant.status == TenantStatus.inactive


@pytest.mark.asyncio
async def test_activate_inactive_tenant(mock_uow):
    tenant = make_tenant(mock_uow, TenantStatus.inactive)

    result = await ActivateTenantUseCase(mock_uow).execute(tenant.id)

    assert result.is_ok()
    assert result.value.previous_status == "inactive"
    assert tenant.status == TenantStatus.active
    assert mock_uow.audit_events.create.call_args[0][0].action == "tenant_activated"


@pytest.mark.asyncio
async def test_activate_does_not_lift_suspension(mock_uow):
    tenant = make_tenant(mock_uow, TenantStatus.suspended)

    result = await ActivateTenantUseCase(mock_uow).execute(tenant.id)

    assert result.is_err()
    assert result.error.code == "TENANT_SUSPENDED"
    assert tenant.status == TenantStatus.suspended
