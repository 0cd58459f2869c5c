"""
Integration tests for the tenancy readiness endpoint and the startup NULL tenant_id check
"""

import logging

import pytest
from httpx import ASGITransport, AsyncClient
from uuid import uuid4

from src.domain.entities import TenantStatus
from tests.integration.helpers import SoftConfig, auth_headers

OPERATOR = auth_headers(uuid4(), None, "super_user")


class StartupCheckConfig(SoftConfig):
    RUN_TENANT_ID_CHECK_ON_STARTUP = True


@pytest.mark.asyncio
async def test_readiness_reports_blockers_then_clears(app_factory, create_scoped_table, make_tenant):
    # Arrange
    owner = await make_tenant(TenantStatus.active)
    await make_tenant(TenantStatus.suspended)
    await create_scoped_table("users", "email", [("u1", "a@x.io", None), ("u2", "b@x.io", None)])
    await create_scoped_table("tasks", "title", [("t1", "Task", str(owner.id))])
    app = app_factory(SoftConfig)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        # Act
        response = await client.get("/api/v1/super/tenancy/health", headers=OPERATOR)

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["current_mode"] == "soft"
        assert data["can_enable_strict"] is False
        assert data["blockers"] == ["users has 2 rows without tenant_id"]
        assert data["total_missing"] == 2
        assert data["active_tenant_count"] == 1
        counts = {c["table"]: c["missing_tenant_id_count"] for c in data["missing_tenant_ids"]}
        assert counts == {"users": 2, "tasks": 0}
        assert "projects" in data["skipped_tables"]

        # Fixing the rows clears the blocker
        fix = await client.post(
            "/api/v1/super/health/orphans/fix",
            json={"dryRun": False, "confirmText": "FIX_ORPHANS"},
            headers=OPERATOR,
        )
        assert fix.status_code == 200

        after = (await client.get("/api/v1/super/tenancy/health", headers=OPERATOR)).json()
        assert after["can_enable_strict"] is True
        assert after["blockers"] == []


@pytest.mark.asyncio
async def test_readiness_requires_operator(client, make_tenant):
    tenant = await make_tenant(TenantStatus.active)

    assert (await client.get("/api/v1/super/tenancy/health")).status_code == 401
    forbidden = await client.get(
        "/api/v1/super/tenancy/health", headers=auth_headers(uuid4(), tenant.id, "admin")
    )
    assert forbidden.status_code == 403


@pytest.mark.asyncio
async def test_startup_warns_about_null_tenant_ids(app_factory, create_scoped_table, caplog):
    await create_scoped_table("tasks", "title", [("t1", "Task", None), ("t2", "Task", None)])
    app = app_factory(StartupCheckConfig)
    caplog.set_level(logging.INFO, logger="src.app.use_cases.ops.tenancy_readiness_use_case")

    async with app.router.lifespan_context(app):
        pass

    messages = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert "Found 2 rows with NULL tenant_id" in messages
    assert "  tasks: 2 rows" in messages
