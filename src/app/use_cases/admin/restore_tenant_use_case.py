"""
Use Case: Restore Tenant

Lifts a suspension once the billing or support issue is resolved.
"""

from datetime import datetime, UTC
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities.enums import TenantStatus

from .suspend_tenant_use_case import TenantStatusChangeResponse


class RestoreTenantUseCase:
    """
    Restore a suspended tenant to active.

    Business Logic:
    1. Validate tenant exists and is suspended
    2. Update tenant status to active
    3. Create audit event
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, tenant_id: UUID) -> Result[TenantStatusChangeResponse]:
        """
        Errors:
            - TENANT_NOT_FOUND: Tenant does not exist
            - TENANT_NOT_SUSPENDED: Only suspended tenants can be restored
        """
        async with self.uow:
            # 1. Get tenant
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            if tenant.status != TenantStatus.suspended:
                return Return.err(
                    Error(
                        "TENANT_NOT_SUSPENDED",
                        "Tenant is not suspended",
                        reason=f"Current status is {tenant.status.value}",
                    )
                )

            # 2. Restore
            tenant.status = TenantStatus.active
            tenant.updated_at = datetime.now(UTC).replace(tzinfo=None)
            await self.uow.tenants.update(tenant)

            # 3. Create audit event
            from src.domain.entities import AuditEvent

            audit_event = AuditEvent(
                tenant_id=tenant_id,
                user_id=None,
                action="tenant_restored",
                event_metadata={"restored_at": datetime.now(UTC).isoformat()},
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()

            return Return.ok(
                TenantStatusChangeResponse(
                    tenant_id=str(tenant_id),
                    previous_status=TenantStatus.suspended.value,
                    status=TenantStatus.active.value,
                    changed=True,
                )
            )
