"""
Use Case: Detect Orphaned Records

Read-only scan of every tenant-scoped table for rows with no tenant id.
Safe to call repeatedly; performs no writes.
"""

from typing import Sequence

from libs.result import Result, Return
from src.app.services.tenant_tables import ORPHAN_SCAN_TABLES, ScopedTable
from src.app.services.unit_of_work import UnitOfWork

from .dtos import (
    QUARANTINE_TENANT_SLUG,
    DetectOrphansResponse,
    OrphanSample,
    OrphanTableReport,
    QuarantineTenantInfo,
)


class DetectOrphansUseCase:
    """
    Report orphan counts and samples per table.

    Business Logic:
    1. For each scanned table present in the schema, count NULL tenant_id rows
    2. Fetch up to `sample_limit` sample ids with a display value
    3. Report whether the quarantine tenant already exists
    """

    def __init__(self, uow: UnitOfWork, tables: Sequence[ScopedTable] = ORPHAN_SCAN_TABLES):
        self.uow = uow
        self.tables = tables

    async def execute(self, sample_limit: int = 5) -> Result[DetectOrphansResponse]:
        reports = []

        async with self.uow:
            for scoped in self.tables:
                if not await self.uow.records.table_exists(scoped.name):
                    continue

                count = await self.uow.records.count_missing_tenant(scoped.name)
                samples = []
                if count > 0 and sample_limit > 0:
                    rows = await self.uow.records.sample_missing_tenant(
                        scoped.name, scoped.display_column, sample_limit
                    )
                    samples = [OrphanSample(**row) for row in rows]

                reports.append(
                    OrphanTableReport(
                        table=scoped.name,
                        count=count,
                        sample_ids=samples,
                        recommended_action="quarantine" if count > 0 else "skip",
                    )
                )

            quarantine = await self.uow.tenants.get_by_slug(QUARANTINE_TENANT_SLUG)
            quarantine_info = QuarantineTenantInfo(
                exists=quarantine is not None,
                id=str(quarantine.id) if quarantine else None,
                name=quarantine.name if quarantine else None,
            )

        return Return.ok(
            DetectOrphansResponse(
                total_orphans=sum(r.count for r in reports),
                tables_with_orphans=sum(1 for r in reports if r.count > 0),
                tables=reports,
                quarantine_tenant=quarantine_info,
            )
        )
