"""
Unit tests for BackfillTenantsUseCase
"""

import pytest
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock
from uuid import uuid4

from src.app.use_cases.backfill import (
    DEFAULT_TENANT_NAME,
    DEFAULT_TENANT_SLUG,
    BackfillTenantsUseCase,
)
from src.cli import backfill_tenants
from src.domain.entities import Tenant, TenantStatus

TABLES = ("users", "projects", "tasks", "app_settings")


def setup_records(mock_uow, counts, existing=("users", "projects", "tasks")):
    remaining = dict(counts)

    async def count_missing(table):
        return remaining.get(table, 0)

    async def assign(table, tenant_id):
        fixed = remaining.get(table, 0)
        remaining[table] = 0
        return fixed

    mock_uow.records.table_exists = AsyncMock(side_effect=lambda table: table in existing)
    mock_uow.records.count_missing_tenant = AsyncMock(side_effect=count_missing)
    mock_uow.records.assign_tenant_to_missing = AsyncMock(side_effect=assign)
    mock_uow.audit_events.create = AsyncMock()


@pytest.mark.asyncio
async def test_backfill_creates_default_tenant_and_updates(mock_uow):
    # Arrange
    setup_records(mock_uow, {"users": 3, "tasks": 7})
    mock_uow.tenants.get_by_slug = AsyncMock(return_value=None)
    mock_uow.tenants.create = AsyncMock(side_effect=lambda tenant: tenant)

    # Act
    result = await BackfillTenantsUseCase(mock_uow, TABLES).execute()

    # Assert
    assert result.is_ok()
    report = result.value
    assert report.target_tenant_created is True
    assert report.target_tenant_slug == DEFAULT_TENANT_SLUG
    assert report.total_missing == 10
    assert report.total_updated == 10
    assert report.remaining == 0
    assert report.skipped_tables == ["app_settings"]
    assert [t.table for t in report.tables] == ["users", "projects", "tasks"]

    default = mock_uow.tenants.create.call_args[0][0]
    assert default.name == DEFAULT_TENANT_NAME
    assert default.status == TenantStatus.active

    audit = mock_uow.audit_events.create.call_args[0][0]
    assert audit.action == "tenant_backfill"
    assert audit.event_metadata["total_updated"] == 10


@pytest.mark.asyncio
async def test_backfill_processes_tables_in_given_order(mock_uow):
    setup_records(mock_uow, {"users": 1, "projects": 1, "tasks": 1})
    tenant = Tenant(id=uuid4(), name="Acme", slug="acme", status=TenantStatus.active)
    mock_uow.tenants.get_by_slug = AsyncMock(return_value=tenant)

    await BackfillTenantsUseCase(mock_uow, TABLES).execute(target_tenant="acme")

    updated = [c.args[0] for c in mock_uow.records.assign_tenant_to_missing.call_args_list]
    assert updated == ["users", "projects", "tasks"]


@pytest.mark.asyncio
async def test_backfill_dry_run_does_not_create_or_update(mock_uow):
    setup_records(mock_uow, {"users": 3})
    mock_uow.tenants.get_by_slug = AsyncMock(return_value=None)
    mock_uow.tenants.create = AsyncMock()

    result = await BackfillTenantsUseCase(mock_uow, TABLES).execute(dry_run=True)

    assert result.is_ok()
    report = result.value
    assert report.target_tenant_id is None
    assert report.total_missing == 3
    assert report.total_updated == 0
    assert report.remaining == 3
    mock_uow.tenants.create.assert_not_called()
    mock_uow.records.assign_tenant_to_missing.assert_not_called()
    mock_uow.audit_events.create.assert_not_called()


@pytest.mark.asyncio
async def test_backfill_target_by_id(mock_uow):
    setup_records(mock_uow, {"tasks": 2})
    tenant = Tenant(id=uuid4(), name="Acme", slug="acme", status=TenantStatus.active)
    mock_uow.tenants.get_by_slug = AsyncMock(return_value=None)
    mock_uow.tenants.get_by_id = AsyncMock(return_value=tenant)

    result = await BackfillTenantsUseCase(mock_uow, TABLES).execute(target_tenant=str(tenant.id))

    assert result.is_ok()
    assert result.value.target_tenant_id == str(tenant.id)
    mock_uow.records.assign_tenant_to_missing.assert_awaited_once_with("tasks", tenant.id)


@pytest.mark.asyncio
@pytest.mark.parametrize("target", ["missing-slug", "00000000-0000-0000-0000-000000000000"])
async def test_backfill_unknown_target_fails(mock_uow, target):
    setup_records(mock_uow, {"tasks": 2})
    mock_uow.tenants.get_by_slug = AsyncMock(return_value=None)
    mock_uow.tenants.get_by_id = AsyncMock(return_value=None)

    result = await BackfillTenantsUseCase(mock_uow, TABLES).execute(target_tenant=target)

    assert result.is_err()
    assert result.error.code == "TENANT_NOT_FOUND"
    mock_uow.records.assign_tenant_to_missing.assert_not_called()


@pytest.mark.asyncio
async def test_backfill_rerun_is_noop(mock_uow):
    setup_records(mock_uow, {})
    tenant = Tenant(id=uuid4(), name=DEFAULT_TENANT_NAME, slug=DEFAULT_TENANT_SLUG)
    mock_uow.tenants.get_by_slug = AsyncMock(return_value=tenant)

    result = await BackfillTenantsUseCase(mock_uow, TABLES).execute()

    assert result.is_ok()
    assert result.value.remaining == 0
    assert result.value.total_updated == 0
    mock_uow.audit_events.create.assert_not_called()


def fail_on(mock_uow, failing_table):
    assign = mock_uow.records.assign_tenant_to_missing.side_effect

    async def assign_or_fail(table, tenant_id):
        if table == failing_table:
            raise RuntimeError("deadlock detected")
        return await assign(table, tenant_id)

    mock_uow.records.assign_tenant_to_missing = AsyncMock(side_effect=assign_or_fail)


@pytest.mark.asyncio
async def test_backfill_table_error_is_reported_and_others_continue(mock_uow):
    # Arrange
    setup_records(mock_uow, {"users": 2, "projects": 1, "tasks": 5})
    fail_on(mock_uow, "tasks")
    tenant = Tenant(id=uuid4(), name="Acme", slug="acme", status=TenantStatus.active)
    mock_uow.tenants.get_by_slug = AsyncMock(return_value=tenant)

    # Act
    result = await BackfillTenantsUseCase(mock_uow, TABLES).execute(target_tenant="acme")

    # Assert
    assert result.is_ok()
    report = result.value
    by_table = {t.table: t for t in report.tables}
    assert by_table["users"].updated_count == 2
    assert by_table["projects"].updated_count == 1
    assert by_table["tasks"].error == "deadlock detected"
    assert by_table["tasks"].after_count == 5
    assert report.failed_tables == ["tasks"]
    assert report.total_updated == 3
    assert report.remaining == 5
    mock_uow.rollback.assert_awaited()
    assert mock_uow.audit_events.create.call_args[0][0].event_metadata["total_updated"] == 3


@pytest.mark.asyncio
async def test_backfill_cli_exits_nonzero_on_table_error(mock_uow, capsys):
    setup_records(mock_uow, {"users": 2, "tasks": 5}, existing=("users", "tasks"))
    fail_on(mock_uow, "tasks")
    tenant = Tenant(id=uuid4(), name="Acme", slug="acme", status=TenantStatus.active)
    mock_uow.tenants.get_by_slug = AsyncMock(return_value=tenant)

    @asynccontextmanager
    async def scope():
        yield mock_uow

    exit_code = await backfill_tenants.run(False, "acme", scope)

    out = capsys.readouterr().out
    assert exit_code == 1
    assert "users: 2 missing, 2 updated, 0 remaining" in out
    assert "tasks: ERROR deadlock detected" in out
    assert "You can now safely enable" not in out
