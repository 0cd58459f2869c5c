"""
Use Case: Fix Orphaned Records

Reassigns rows with no tenant id to the quarantine tenant so they become
queryable and auditable without being attributed to a real tenant.

Execution commits each table on its own and reports it separately. A re-run
picks up whatever is still NULL.
"""

import logging
from datetime import datetime, UTC
from typing import Optional, Sequence
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.tenant_tables import ORPHAN_SCAN_TABLES, ScopedTable
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, OrphanFixAction, Tenant, TenantStatus

from .dtos import (
    FIX_ORPHANS_CONFIRMATION,
    QUARANTINE_TENANT_NAME,
    QUARANTINE_TENANT_SLUG,
    FixOrphansResponse,
    OrphanFixResult,
)

logger = logging.getLogger(__name__)


class FixOrphansUseCase:
    """
    Quarantine orphaned rows, dry-run first.

    Business Logic:
    1. Reject execution without the exact confirmation text (before any data access)
    2. Execution: find or create the suspended quarantine tenant
    3. Per table: count NULL rows, then reassign them (execution) or report would_fix
    4. Execution: record an audit event with the per-table results and the actor

    Idempotent: a second execution finds no orphans and reuses the same
    quarantine tenant.
    """

    def __init__(self, uow: UnitOfWork, tables: Sequence[ScopedTable] = ORPHAN_SCAN_TABLES):
        self.uow = uow
        self.tables = tables

    async def execute(
        self,
        dry_run: bool,
        confirm_text: Optional[str] = None,
        actor_user_id: Optional[UUID] = None,
    ) -> Result[FixOrphansResponse]:
        """
        Execute fix orphans use case.

        Errors:
            - CONFIRMATION_REQUIRED: dry_run is False and confirm_text is not FIX_ORPHANS
        """
        if not dry_run and confirm_text != FIX_ORPHANS_CONFIRMATION:
            return Return.err(
                Error(
                    "CONFIRMATION_REQUIRED",
                    f"To execute orphan fix, set dryRun=false and confirmText='{FIX_ORPHANS_CONFIRMATION}'",
                )
            )

        async with self.uow:
            quarantine_id, quarantine_created = await self._resolve_quarantine(dry_run)

            results = []
            for scoped in self.tables:
                results.append(await self._fix_table(scoped.name, quarantine_id, dry_run))

            if not dry_run:
                await self._record_audit(results, quarantine_id, quarantine_created, actor_user_id)

        total_fixed = sum(r.count_fixed for r in results)
        total_would_fix = sum(
            r.count_before for r in results if r.action == OrphanFixAction.would_fix
        )

        return Return.ok(
            FixOrphansResponse(
                dry_run=dry_run,
                quarantine_tenant_id=str(quarantine_id) if quarantine_id else None,
                quarantine_created=quarantine_created,
                total_fixed=total_fixed,
                total_would_fix=total_would_fix,
                results=results,
            )
        )

    async def _resolve_quarantine(self, dry_run: bool):
        quarantine = await self.uow.tenants.get_by_slug(QUARANTINE_TENANT_SLUG)
        if quarantine is not None:
            return quarantine.id, False
        if dry_run:
            return None, False

        quarantine = await self.uow.tenants.create(
            Tenant(
                name=QUARANTINE_TENANT_NAME,
                slug=QUARANTINE_TENANT_SLUG,
                status=TenantStatus.suspended,
            )
        )
        await self.uow.commit()
        logger.info(f"Created quarantine tenant {quarantine.id}")
        return quarantine.id, True

    async def _fix_table(
        self, table: str, quarantine_id: Optional[UUID], dry_run: bool
    ) -> OrphanFixResult:
        target = str(quarantine_id) if quarantine_id else None
        count_before = 0
        try:
            if not await self.uow.records.table_exists(table):
                return OrphanFixResult(
                    table=table, action=OrphanFixAction.skipped, count_before=0, count_fixed=0
                )

            count_before = await self.uow.records.count_missing_tenant(table)
            if count_before == 0:
                return OrphanFixResult(
                    table=table, action=OrphanFixAction.no_orphans, count_before=0, count_fixed=0
                )

            if dry_run:
                return OrphanFixResult(
                    table=table,
                    action=OrphanFixAction.would_fix,
                    count_before=count_before,
                    count_fixed=0,
                    target_tenant_id=target,
                )

            count_fixed = await self.uow.records.assign_tenant_to_missing(table, quarantine_id)
            await self.uow.commit()
        except Exception as exc:
            await self.uow.rollback()
            logger.error(f"Orphan fix failed for {table}: {exc}")
            return OrphanFixResult(
                table=table,
                action=OrphanFixAction.error,
                count_before=count_before,
                count_fixed=0,
                target_tenant_id=target,
                error=str(exc),
            )

        if count_fixed != count_before:
            logger.warning(
                f"Orphan fix count mismatch on {table}: {count_before} before, {count_fixed} fixed"
            )
        return OrphanFixResult(
            table=table,
            action=OrphanFixAction.fixed,
            count_before=count_before,
            count_fixed=count_fixed,
            target_tenant_id=target,
        )

    async def _record_audit(self, results, quarantine_id, quarantine_created, actor_user_id):
        audit_event = AuditEvent(
            tenant_id=quarantine_id,
            user_id=actor_user_id,
            action="orphans_fixed",
            event_metadata={
                "quarantine_created": quarantine_created,
                "fixed_at": datetime.now(UTC).isoformat(),
                "results": [r.model_dump(mode="json") for r in results],
            },
        )
        await self.uow.audit_events.create(audit_event)
        await self.uow.commit()
