"""
Use Case: Get Agreement Status

Tells the caller whether an agreement applies to them and whether they
already accepted its current version. Backs the accept-terms page.
"""

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Principal

from .dtos import AgreementStatusResponse, AgreementSummary


class GetAgreementStatusUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, principal: Principal) -> Result[AgreementStatusResponse]:
        # Operators and users without a tenant are never asked to accept
        if principal.is_platform_operator or principal.tenant_id is None:
            return Return.ok(AgreementStatusResponse(required=False, accepted=True))

        async with self.uow:
            agreement = await self.uow.agreements.get_active(principal.tenant_id)
            if agreement is None:
                agreement = await self.uow.agreements.get_active(None)

            if agreement is None:
                return Return.ok(AgreementStatusResponse(required=False, accepted=True))

            accepted = await self.uow.acceptances.exists(
                principal.tenant_id, principal.user_id, agreement.id, agreement.version
            )
            summary = AgreementSummary(
                id=str(agreement.id), title=agreement.title, version=agreement.version
            )

        return Return.ok(
            AgreementStatusResponse(required=True, accepted=accepted, agreement=summary)
        )
