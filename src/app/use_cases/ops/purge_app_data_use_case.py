"""
Use Case: Purge Application Data

Deletes all application rows, table by table, children first. Audit events
are kept. Safety flags are checked before any data access.
"""

import logging
from typing import List, Mapping, Optional, Sequence

from pydantic import BaseModel

from libs.result import Error, Result, Return
from src.app.services.tenant_tables import PURGE_ORDER
from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

PURGE_CONFIRMATION = "YES_PURGE_APP_DATA"


class PurgeTableResult(BaseModel):
    table: str
    status: str  # "success" | "skipped" | "error"
    rows_deleted: int = 0
    error: Optional[str] = None


class PurgeAppDataResponse(BaseModel):
    """Response DTO for PurgeAppDataUseCase"""

    environment: str
    tables: List[PurgeTableResult]
    total_deleted: int
    failed_tables: int


def check_purge_safety(env: Mapping[str, str]) -> Optional[Error]:
    """
    Evaluate the purge guard flags.

    Returns:
        None when every required flag is set, otherwise the failing Error
    """
    if env.get("PURGE_APP_DATA_ALLOWED") != "true":
        return Error(
            "PURGE_NOT_ALLOWED",
            "Purge is disabled",
            reason="Set PURGE_APP_DATA_ALLOWED=true to enable",
        )

    if env.get("PURGE_APP_DATA_CONFIRM") != PURGE_CONFIRMATION:
        return Error(
            "CONFIRMATION_REQUIRED",
            "Purge confirmation missing",
            reason=f"Set PURGE_APP_DATA_CONFIRM={PURGE_CONFIRMATION}",
        )

    if env.get("APP_ENV") == "production" and env.get("PURGE_PROD_ALLOWED") != "true":
        return Error(
            "PRODUCTION_PURGE_NOT_ALLOWED",
            "Refusing to purge a production database",
            reason="Set PURGE_PROD_ALLOWED=true to purge production",
        )

    return None


class PurgeAppDataUseCase:
    """
    Purge all application data.

    Business Logic:
    1. Check safety flags (no data access on failure)
    2. Delete each table in FK-safe order, committing per table
    3. Skip tables missing from the schema, record errors and continue
    4. Record a purge audit event (audit_events itself is never purged)
    """

    def __init__(self, uow: UnitOfWork, tables: Sequence[str] = PURGE_ORDER):
        self.uow = uow
        self.tables = tables

    async def execute(self, env: Mapping[str, str]) -> Result[PurgeAppDataResponse]:
        """
        Errors:
            - PURGE_NOT_ALLOWED, CONFIRMATION_REQUIRED, PRODUCTION_PURGE_NOT_ALLOWED
        """
        # 1. Safety flags
        error = check_purge_safety(env)
        if error:
            return Return.err(error)

        environment = env.get("APP_ENV", "development")
        logger.warning(f"Purging application data in {environment}")

        results = []
        async with self.uow:
            # 2. Delete per table
            for table in self.tables:
                try:
                    if not await self.uow.records.table_exists(table):
                        results.append(PurgeTableResult(table=table, status="skipped"))
                        continue
                    deleted = await self.uow.records.delete_all(table)
                    await self.uow.commit()
                except Exception as exc:
                    # 3. Keep going
                    await self.uow.rollback()
                    logger.error(f"Purge failed for {table}: {exc}")
                    results.append(PurgeTableResult(table=table, status="error", error=str(exc)))
                    continue

                logger.info(f"Purged {deleted} rows from {table}")
                results.append(
                    PurgeTableResult(table=table, status="success", rows_deleted=deleted)
                )

            total_deleted = sum(r.rows_deleted for r in results)

            # 4. Audit
            from src.domain.entities import AuditEvent

            audit_event = AuditEvent(
                tenant_id=None,
                user_id=None,
                action="app_data_purged",
                event_metadata={
                    "environment": environment,
                    "total_deleted": total_deleted,
                    "tables": [r.model_dump() for r in results],
                },
            )
            await self.uow.audit_events.create(audit_event)
            await self.uow.commit()

        return Return.ok(
            PurgeAppDataResponse(
                environment=environment,
                tables=results,
                total_deleted=total_deleted,
                failed_tables=sum(1 for r in results if r.status == "error"),
            )
        )
