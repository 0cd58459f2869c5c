"""
Integration tests for the out-of-band jobs against a real SQLite schema
"""

import pytest
from sqlalchemy import text
from sqlmodel import select

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.ops import PURGE_CONFIRMATION, ParityCheckUseCase
from src.cli import backfill_tenants, parity_check, purge_app_data
from src.domain.entities import AuditEvent, ErrorLog, Tenant, TenantStatus


@pytest.mark.asyncio
async def test_parity_check_reports_missing_tables(db_session):
    report = await ParityCheckUseCase(SqlAlchemyUnitOfWork(db_session), environment="test").execute()

    assert report.passed is False
    missing = {i.table for i in report.critical_issues}
    assert {"users", "tasks", "clients", "notifications"} <= missing
    assert "tenants" not in missing
    assert "error_logs" not in missing
    assert [w.table for w in report.warnings] == ["tenant_settings"]

    logs = (
        await db_session.execute(select(ErrorLog).where(ErrorLog.method == "STARTUP"))
    ).scalars().all()
    assert len(logs) == len(report.critical_issues) + len(report.warnings)
    assert {log.error_name for log in logs} == {"SchemaParityError"}


@pytest.mark.asyncio
async def test_parity_check_detects_missing_column(db_session, create_scoped_table):
    for table in ("users", "workspaces", "projects", "clients", "notifications"):
        await create_scoped_table(table)
    await db_session.execute(text('CREATE TABLE tasks (id TEXT PRIMARY KEY, title TEXT)'))
    await db_session.commit()

    report = await ParityCheckUseCase(SqlAlchemyUnitOfWork(db_session)).execute()

    assert report.passed is False
    assert [(i.table, i.column) for i in report.critical_issues] == [("tasks", "tenant_id")]
    await db_session.execute(text("DROP TABLE tasks"))
    await db_session.commit()


@pytest.mark.asyncio
async def test_parity_cli_exit_code(db_session, uow_scope, capsys):
    exit_code = await parity_check.run(uow_scope, "test")

    assert exit_code == 1
    assert "Parity check FAILED" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_backfill_cli_dry_run_then_execute(db_session, create_scoped_table, uow_scope, capsys):
    # Arrange
    await create_scoped_table("users", "email", [("u1", "a@x.io", None), ("u2", "b@x.io", None)])
    await create_scoped_table("tasks", "title", [("t1", "Task", None)])

    # Dry run: nothing created or changed
    assert await backfill_tenants.run(True, None, uow_scope) == 0
    assert "Re-run without --dry-run" in capsys.readouterr().out
    default = await db_session.execute(select(Tenant).where(Tenant.slug == "default"))
    assert default.scalar_one_or_none() is None

    # Execute
    assert await backfill_tenants.run(False, None, uow_scope) == 0
    out = capsys.readouterr().out
    assert "remaining: 0" in out
    assert "You can now safely enable TENANCY_ENFORCEMENT=strict" in out

    default = (
        await db_session.execute(select(Tenant).where(Tenant.slug == "default"))
    ).scalar_one()
    assert default.name == "Default Organization"
    assert default.status == TenantStatus.active
    owned = await db_session.execute(
        text("SELECT COUNT(*) FROM users WHERE tenant_id = :t"), {"t": str(default.id)}
    )
    assert owned.scalar() == 2

    audit = (
        await db_session.execute(select(AuditEvent).where(AuditEvent.action == "tenant_backfill"))
    ).scalar_one()
    assert audit.event_metadata["total_updated"] == 3

    # Re-run is a no-op
    assert await backfill_tenants.run(False, None, uow_scope) == 0
    assert "updated: 0, remaining: 0" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_backfill_cli_unknown_target(create_scoped_table, uow_scope):
    await create_scoped_table("users", "email", [("u1", "a@x.io", None)])

    assert await backfill_tenants.run(False, "nope", uow_scope) == 1


def test_backfill_parser():
    args = backfill_tenants.build_parser().parse_args(["--dry-run", "--target-tenant", "acme"])

    assert args.dry_run is True
    assert args.target_tenant == "acme"


def test_purge_cli_refuses_without_flags(monkeypatch, capsys):
    monkeypatch.delenv("PURGE_APP_DATA_ALLOWED", raising=False)

    assert purge_app_data.main([]) == 1
    assert "Purge refused" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_purge_run_deletes_and_keeps_audit(db_session, create_scoped_table, uow_scope):
    await create_scoped_table("tasks", "title", [("t1", "Task", None), ("t2", "Task", None)])
    db_session.add(Tenant(name="Acme", slug="acme", status=TenantStatus.active))
    db_session.add(AuditEvent(action="tenant_created"))
    await db_session.commit()

    env = {
        "PURGE_APP_DATA_ALLOWED": "true",
        "PURGE_APP_DATA_CONFIRM": PURGE_CONFIRMATION,
        "APP_ENV": "test",
    }
    assert await purge_app_data.run(env, uow_scope) == 0

    assert (await db_session.execute(text("SELECT COUNT(*) FROM tasks"))).scalar() == 0
    assert (await db_session.execute(text("SELECT COUNT(*) FROM tenants"))).scalar() == 0
    actions = (await db_session.execute(select(AuditEvent.action))).scalars().all()
    assert "tenant_created" in actions
    assert "app_data_purged" in actions
