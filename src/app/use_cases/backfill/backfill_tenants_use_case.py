"""
Use Case: Backfill Tenant IDs

Assigns a target tenant to every historical row that predates tenant
isolation. Once a run reports nothing remaining, strict enforcement can be
switched on.
"""

import logging
from datetime import datetime, UTC
from typing import List, Optional, Sequence
from uuid import UUID

from pydantic import BaseModel

from libs.result import Error, Result, Return
from src.app.services.tenant_tables import BACKFILL_ORDER
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Tenant, TenantStatus

logger = logging.getLogger(__name__)

DEFAULT_TENANT_SLUG = "default"
DEFAULT_TENANT_NAME = "Default Organization"


class BackfillTableResult(BaseModel):
    table: str
    before_count: int
    updated_count: int
    after_count: int
    error: Optional[str] = None


class BackfillTenantsResponse(BaseModel):
    """Response DTO for BackfillTenantsUseCase"""

    dry_run: bool
    target_tenant_id: Optional[str]
    target_tenant_slug: str
    target_tenant_created: bool
    tables: List[BackfillTableResult]
    skipped_tables: List[str]
    total_missing: int
    total_updated: int
    remaining: int
    failed_tables: List[str] = []


class BackfillTenantsUseCase:
    """
    Backfill tenant_id on tenant-scoped tables.

    Business Logic:
    1. Resolve the target tenant (slug, then id; default tenant when none given)
    2. Walk the tables in dependency order, skipping tables not in the schema
    3. Count NULL rows, update them (unless dry run), re-count
    4. Commit per table; a failing table is rolled back, reported and skipped
    5. Record an audit event when rows were updated
    """

    def __init__(self, uow: UnitOfWork, tables: Sequence[str] = BACKFILL_ORDER):
        self.uow = uow
        self.tables = tables

    async def execute(
        self, dry_run: bool = False, target_tenant: Optional[str] = None
    ) -> Result[BackfillTenantsResponse]:
        """
        Execute backfill use case.

        Args:
            dry_run: Count only, do not create the default tenant or update rows
            target_tenant: Slug or UUID of the tenant receiving unowned rows

        Errors:
            - TENANT_NOT_FOUND: Explicit target matches no tenant
        """
        async with self.uow:
            # 1. Resolve target
            tenant_created = False
            if target_tenant:
                tenant = await self._find_tenant(target_tenant)
                if tenant is None:
                    return Return.err(
                        Error(
                            "TENANT_NOT_FOUND",
                            f"Target tenant not found: {target_tenant}",
                        )
                    )
            else:
                tenant = await self.uow.tenants.get_by_slug(DEFAULT_TENANT_SLUG)
                if tenant is None and not dry_run:
                    tenant = await self.uow.tenants.create(
                        Tenant(
                            name=DEFAULT_TENANT_NAME,
                            slug=DEFAULT_TENANT_SLUG,
                            status=TenantStatus.active,
                        )
                    )
                    await self.uow.commit()
                    tenant_created = True
                    logger.info(f"Created default tenant {tenant.id}")

            tenant_id = tenant.id if tenant else None
            slug = tenant.slug if tenant else DEFAULT_TENANT_SLUG

            # 2. Walk tables
            results = []
            skipped = []
            for table in self.tables:
                result = await self._backfill_table(table, tenant_id, dry_run)
                if result is None:
                    skipped.append(table)
                else:
                    results.append(result)

            total_updated = sum(r.updated_count for r in results)

            # 5. Audit
            if total_updated > 0:
                from src.domain.entities import AuditEvent

                audit_event = AuditEvent(
                    tenant_id=tenant_id,
                    user_id=None,
                    action="tenant_backfill",
                    event_metadata={
                        "target_tenant_slug": slug,
                        "total_updated": total_updated,
                        "tables": [r.model_dump() for r in results],
                        "completed_at": datetime.now(UTC).isoformat(),
                    },
                )
                await self.uow.audit_events.create(audit_event)
                await self.uow.commit()

        return Return.ok(
            BackfillTenantsResponse(
                dry_run=dry_run,
                target_tenant_id=str(tenant_id) if tenant_id else None,
                target_tenant_slug=slug,
                target_tenant_created=tenant_created,
                tables=results,
                skipped_tables=skipped,
                total_missing=sum(r.before_count for r in results),
                total_updated=total_updated,
                remaining=sum(r.after_count for r in results),
                failed_tables=[r.table for r in results if r.error],
            )
        )

    async def _find_tenant(self, ref: str) -> Optional[Tenant]:
        tenant = await self.uow.tenants.get_by_slug(ref)
        if tenant is not None:
            return tenant
        try:
            tenant_id = UUID(ref)
        except ValueError:
            return None
        return await self.uow.tenants.get_by_id(tenant_id)

    async def _backfill_table(
        self, table: str, tenant_id: Optional[UUID], dry_run: bool
    ) -> Optional[BackfillTableResult]:
        """Backfill one table and commit it. None when the table is not in the schema."""
        before = 0
        updated = 0
        try:
            if not await self.uow.records.table_exists(table):
                return None

            before = await self.uow.records.count_missing_tenant(table)
            if before > 0 and not dry_run:
                # 3. Update and 4. commit this table
                updated = await self.uow.records.assign_tenant_to_missing(table, tenant_id)
                await self.uow.commit()
            after = await self.uow.records.count_missing_tenant(table)
        except Exception as exc:
            await self.uow.rollback()
            logger.error(f"Backfill failed for {table}: {exc}")
            return BackfillTableResult(
                table=table,
                before_count=before,
                updated_count=updated,
                after_count=before - updated,
                error=str(exc),
            )

        logger.info(f"Backfill {table}: {before} missing, {updated} updated, {after} remaining")
        return BackfillTableResult(
            table=table, before_count=before, updated_count=updated, after_count=after
        )
