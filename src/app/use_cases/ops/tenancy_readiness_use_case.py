"""
Use Case: Tenancy Readiness

Tells an operator whether strict enforcement can be switched on: rows still
missing a tenant id block it. Also backs the startup NULL tenant_id warning.
"""

import logging
from datetime import datetime, UTC
from typing import List, Sequence

from pydantic import BaseModel

from src.app.services.tenant_tables import BACKFILL_ORDER
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import TenantStatus

logger = logging.getLogger(__name__)

BACKFILL_HINT = "Run the backfill job: python -m src.cli.backfill_tenants --dry-run"

# Reported for a table whose count query failed
COUNT_FAILED = -1


class MissingTenantIdCount(BaseModel):
    table: str
    missing_tenant_id_count: int


class TenancyReadinessResponse(BaseModel):
    """Response DTO for TenancyReadinessUseCase"""

    current_mode: str
    missing_tenant_ids: List[MissingTenantIdCount]
    skipped_tables: List[str]
    total_missing: int
    can_enable_strict: bool
    blockers: List[str]
    active_tenant_count: int
    checked_at: str


async def count_missing_tenant_ids(
    uow: UnitOfWork, tables: Sequence[str] = BACKFILL_ORDER
):
    """
    Count NULL tenant_id rows per table, inside an open unit of work.

    Returns (counts, skipped). Tables not in the schema are skipped; a table
    whose count fails is reported with COUNT_FAILED.
    """
    counts = []
    skipped = []
    for table in tables:
        try:
            if not await uow.records.table_exists(table):
                skipped.append(table)
                continue
            count = await uow.records.count_missing_tenant(table)
        except Exception as exc:
            await uow.rollback()
            logger.error(f"Could not count missing tenant ids in {table}: {exc}")
            count = COUNT_FAILED
        counts.append(MissingTenantIdCount(table=table, missing_tenant_id_count=count))
    return counts, skipped


class TenancyReadinessUseCase:
    """
    Report NULL tenant_id counts and whether strict mode is safe.

    Business Logic:
    1. Count rows without a tenant id in every tenant-scoped table
    2. Each table with missing rows, or whose count failed, is a blocker
    3. can_enable_strict is True when there are no blockers
    4. Count active tenants for context
    """

    def __init__(self, uow: UnitOfWork, tables: Sequence[str] = BACKFILL_ORDER):
        self.uow = uow
        self.tables = tables

    async def execute(self, current_mode: str) -> TenancyReadinessResponse:
        async with self.uow:
            counts, skipped = await count_missing_tenant_ids(self.uow, self.tables)
            active_tenants = await self.uow.tenants.count_by_status(TenantStatus.active)

        blockers = []
        for entry in counts:
            if entry.missing_tenant_id_count == COUNT_FAILED:
                blockers.append(f"{entry.table} could not be checked")
            elif entry.missing_tenant_id_count > 0:
                blockers.append(
                    f"{entry.table} has {entry.missing_tenant_id_count} rows without tenant_id"
                )

        return TenancyReadinessResponse(
            current_mode=current_mode,
            missing_tenant_ids=counts,
            skipped_tables=skipped,
            total_missing=sum(max(c.missing_tenant_id_count, 0) for c in counts),
            can_enable_strict=not blockers,
            blockers=blockers,
            active_tenant_count=active_tenants,
            checked_at=datetime.now(UTC).isoformat(),
        )


async def log_missing_tenant_ids(uow: UnitOfWork, tables: Sequence[str] = BACKFILL_ORDER) -> int:
    """
    Startup check: warn about rows still missing a tenant id.

    Never raises. Returns the number of rows found.
    """
    try:
        async with uow:
            counts, _ = await count_missing_tenant_ids(uow, tables)
    except Exception as exc:
        logger.error(f"Failed to check NULL tenant ids: {exc}")
        return 0

    missing = [c for c in counts if c.missing_tenant_id_count > 0]
    total = sum(c.missing_tenant_id_count for c in missing)
    if not missing:
        logger.info("All tenant-scoped tables have tenant ids")
        return 0

    logger.warning(f"Found {total} rows with NULL tenant_id")
    for entry in missing:
        logger.warning(f"  {entry.table}: {entry.missing_tenant_id_count} rows")
    logger.warning(BACKFILL_HINT)
    return total
