"""
Use Case: Suspend Tenant

Billing or support action that blocks every non-exempt request from the
tenant's users, tenant admins included.
"""

from datetime import datetime, UTC
from uuid import UUID
from pydantic import BaseModel

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities.enums import TenantStatus


class TenantStatusChangeResponse(BaseModel):
    """Response DTO shared by the tenant status transition use cases"""

    tenant_id: str
    previous_status: str
    status: str
    changed: bool


class SuspendTenantUseCase:
    """
    Suspend a tenant.

    Business Logic:
    1. Validate tenant exists
    2. Update tenant status to suspended
    3. Create audit event
    4. Return previous and new status

    Idempotent: suspending an already-suspended tenant succeeds with changed=False.
    The caller invalidates the tenant status cache.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, tenant_id: UUID) -> Result[TenantStatusChangeResponse]:
        """
        Execute suspend tenant use case.

        Args:
            tenant_id: UUID of tenant to suspend

        Errors:
            - TENANT_NOT_FOUND: Tenant does not exist
        """
        async with self.uow:
            # 1. Get tenant
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            previous = tenant.status
            if previous == TenantStatus.suspended:
                return Return.ok(
                    TenantStatusChangeResponse(
                        tenant_id=str(tenant_id),
                        previous_status=previous.value,
                        status=previous.value,
                        changed=False,
                    )
                )

            # 2. Suspend
            tenant.status = TenantStatus.suspended
            tenant.updated_at = datetime.now(UTC).replace(tzinfo=None)
            await self.uow.tenants.update(tenant)

            # 3. Create audit event
            from src.domain.entities import AuditEvent

            audit_event = AuditEvent(
                tenant_id=tenant_id,
                user_id=None,  # System action, no specific user
                action="tenant_suspended",
                event_metadata={
                    "previous_status": previous.value,
                    "suspended_at": datetime.now(UTC).isoformat(),
                },
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()

            return Return.ok(
                TenantStatusChangeResponse(
                    tenant_id=str(tenant_id),
                    previous_status=previous.value,
                    status=TenantStatus.suspended.value,
                    changed=True,
                )
            )
