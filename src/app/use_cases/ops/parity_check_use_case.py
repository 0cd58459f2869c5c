"""
Use Case: Production Parity Check

Verifies that the live schema carries the tables and columns tenant
isolation depends on. Drift is logged and written to error_logs, never
raised.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, UTC
from typing import List, Optional

from pydantic import BaseModel

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ErrorLog

logger = logging.getLogger(__name__)

PARITY_CHECK_PATH = "/production-parity-check"
PARITY_ERROR_NAME = "SchemaParityError"


@dataclass(frozen=True)
class TableCheck:
    table: str
    critical: bool
    guidance: str


@dataclass(frozen=True)
class ColumnCheck:
    table: str
    column: str
    critical: bool
    guidance: str


TABLE_CHECKS = (
    TableCheck("tenants", True, "Run database migrations to create the tenants table"),
    TableCheck("users", True, "Run database migrations to create the users table"),
    TableCheck("workspaces", True, "Run database migrations to create the workspaces table"),
    TableCheck("projects", True, "Run database migrations to create the projects table"),
    TableCheck("tasks", True, "Run database migrations to create the tasks table"),
    TableCheck("clients", True, "Run database migrations to create the clients table"),
    TableCheck("notifications", True, "Run database migrations to create the notifications table"),
    TableCheck("error_logs", True, "Run database migrations to create the error_logs table"),
    TableCheck(
        "tenant_agreements", True, "Run database migrations to create the tenant_agreements table"
    ),
    TableCheck(
        "tenant_agreement_acceptances",
        True,
        "Run database migrations to create the tenant_agreement_acceptances table",
    ),
    TableCheck(
        "tenant_settings",
        False,
        "Tenant settings will fall back to defaults until the table is created",
    ),
)

COLUMN_CHECKS = (
    ColumnCheck("users", "tenant_id", True, "Add tenant_id to users, then run the backfill job"),
    ColumnCheck(
        "projects", "tenant_id", True, "Add tenant_id to projects, then run the backfill job"
    ),
    ColumnCheck("tasks", "tenant_id", True, "Add tenant_id to tasks, then run the backfill job"),
    ColumnCheck("clients", "tenant_id", True, "Add tenant_id to clients, then run the backfill job"),
    ColumnCheck(
        "notifications",
        "tenant_id",
        True,
        "Add tenant_id to notifications, then run the backfill job",
    ),
    ColumnCheck(
        "error_logs", "request_id", True, "Add request_id to error_logs for request correlation"
    ),
    ColumnCheck("tenants", "status", True, "Add status to tenants; tenant guards depend on it"),
    ColumnCheck(
        "tenant_settings",
        "chat_retention_days",
        False,
        "Chat retention falls back to the platform default until the column exists",
    ),
)


class ParityIssue(BaseModel):
    kind: str  # "table" | "column"
    table: str
    column: Optional[str] = None
    critical: bool
    guidance: str


class ParityCheckResponse(BaseModel):
    """Response DTO for ParityCheckUseCase"""

    passed: bool
    critical_issues: List[ParityIssue]
    warnings: List[ParityIssue]
    checked_at: str


class ParityCheckUseCase:
    """
    Check the live schema against the critical table and column lists.

    Business Logic:
    1. Check every table; remember which exist
    2. Check columns of existing tables only
    3. Log each missing item and persist an error_logs row for it
    4. passed is True when no critical item is missing

    Never raises; a failing schema inspection is reported as a critical issue.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        environment: str = "development",
        table_checks=TABLE_CHECKS,
        column_checks=COLUMN_CHECKS,
    ):
        self.uow = uow
        self.environment = environment
        self.table_checks = table_checks
        self.column_checks = column_checks

    async def execute(self) -> ParityCheckResponse:
        checked_at = datetime.now(UTC)
        request_id = f"startup-check-{int(checked_at.timestamp() * 1000)}"
        issues: List[ParityIssue] = []

        try:
            async with self.uow:
                # 1. Tables
                present = set()
                for check in self.table_checks:
                    if await self.uow.records.table_exists(check.table):
                        present.add(check.table)
                    else:
                        issues.append(
                            ParityIssue(
                                kind="table",
                                table=check.table,
                                critical=check.critical,
                                guidance=check.guidance,
                            )
                        )

                # 2. Columns
                for check in self.column_checks:
                    if check.table not in present:
                        continue
                    if not await self.uow.records.column_exists(check.table, check.column):
                        issues.append(
                            ParityIssue(
                                kind="column",
                                table=check.table,
                                column=check.column,
                                critical=check.critical,
                                guidance=check.guidance,
                            )
                        )

                # 3. Report
                for issue in issues:
                    self._log_issue(issue)
                if issues:
                    await self._persist_issues(issues, request_id)
        except Exception as exc:
            logger.error(f"Parity check could not inspect the schema: {exc}")
            issues.append(
                ParityIssue(
                    kind="table",
                    table="*",
                    critical=True,
                    guidance=f"Schema inspection failed: {exc}",
                )
            )

        critical = [i for i in issues if i.critical]
        warnings = [i for i in issues if not i.critical]
        if not issues:
            logger.info("Production parity check passed")

        return ParityCheckResponse(
            passed=not critical,
            critical_issues=critical,
            warnings=warnings,
            checked_at=checked_at.isoformat(),
        )

    def _log_issue(self, issue: ParityIssue) -> None:
        target = f"{issue.table}.{issue.column}" if issue.column else issue.table
        message = f"Missing {issue.kind} {target}: {issue.guidance}"
        if issue.critical:
            logger.error(f"CRITICAL: {message}")
        else:
            logger.warning(message)

    async def _persist_issues(self, issues: List[ParityIssue], request_id: str) -> None:
        try:
            for issue in issues:
                target = f"{issue.table}.{issue.column}" if issue.column else issue.table
                await self.uow.error_logs.create(
                    ErrorLog(
                        request_id=request_id,
                        method="STARTUP",
                        path=PARITY_CHECK_PATH,
                        status=500 if issue.critical else 400,
                        error_name=PARITY_ERROR_NAME,
                        message=f"Missing {issue.kind}: {target}",
                        meta=issue.model_dump(),
                        environment=self.environment,
                    )
                )
            await self.uow.commit()
        except Exception as exc:
            # error_logs may be the missing table
            await self.uow.rollback()
            logger.warning(f"Could not persist parity issues: {exc}")
