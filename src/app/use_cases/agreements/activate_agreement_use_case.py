"""
Use Case: Activate Agreement

Makes an agreement the active one for its scope (a tenant, or global).
The caller is responsible for invalidating the agreement cache with the
returned tenant_id.
"""

from datetime import datetime, UTC
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AgreementStatus

from .dtos import ActivateAgreementResponse


class ActivateAgreementUseCase:
    """
    Activate an agreement.

    Business Logic:
    1. Validate agreement exists and is not retired
    2. Retire every other active agreement in the same scope
    3. Mark the target active with effective_at = now
    4. Create audit event
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, agreement_id: UUID, actor_user_id: Optional[UUID] = None
    ) -> Result[ActivateAgreementResponse]:
        """
        Errors:
            - AGREEMENT_NOT_FOUND: Agreement does not exist
            - AGREEMENT_RETIRED: Retired agreements cannot be re-activated
        """
        async with self.uow:
            # 1. Get agreement
            agreement = await self.uow.agreements.get_by_id(agreement_id)
            if not agreement:
                return Return.err(Error("AGREEMENT_NOT_FOUND", "Agreement not found"))

            if agreement.status == AgreementStatus.retired:
                return Return.err(
                    Error("AGREEMENT_RETIRED", "Retired agreements cannot be re-activated")
                )

            # 2. Retire others in scope
            retired_ids = []
            for other in await self.uow.agreements.list_active(agreement.tenant_id):
                if other.id == agreement.id:
                    continue
                other.status = AgreementStatus.retired
                await self.uow.agreements.update(other)
                retired_ids.append(str(other.id))

            # 3. Activate
            now = datetime.now(UTC)
            agreement.status = AgreementStatus.active
            agreement.effective_at = now.replace(tzinfo=None)
            await self.uow.agreements.update(agreement)

            # 4. Audit
            from src.domain.entities import AuditEvent

            audit_event = AuditEvent(
                tenant_id=agreement.tenant_id,
                user_id=actor_user_id,
                action="agreement_activated",
                event_metadata={
                    "agreement_id": str(agreement.id),
                    "version": agreement.version,
                    "retired_agreement_ids": retired_ids,
                },
            )
            await self.uow.audit_events.create(audit_event)
            await self.uow.commit()

            return Return.ok(
                ActivateAgreementResponse(
                    agreement_id=str(agreement.id),
                    tenant_id=str(agreement.tenant_id) if agreement.tenant_id else None,
                    version=agreement.version,
                    retired_agreement_ids=retired_ids,
                    activated_at=now.isoformat(),
                )
            )
