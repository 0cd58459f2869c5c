from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.agreement_repository import (
    IAgreementAcceptanceRepository,
    IAgreementRepository,
)
from src.domain.entities import Agreement, AgreementAcceptance, AgreementStatus


def _scope_clause(tenant_id: Optional[UUID]):
    if tenant_id is None:
        return Agreement.tenant_id.is_(None)
    return Agreement.tenant_id == tenant_id


class AgreementRepository(IAgreementRepository):
    """Agreement repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, agreement_id: UUID) -> Optional[Agreement]:
        stmt = select(Agreement).where(Agreement.id == agreement_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_active(self, tenant_id: Optional[UUID]) -> Optional[Agreement]:
        stmt = (
            select(Agreement)
            .where(_scope_clause(tenant_id))
            .where(Agreement.status == AgreementStatus.active)
            .order_by(Agreement.version.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_active(self, tenant_id: Optional[UUID]) -> List[Agreement]:
        stmt = (
            select(Agreement)
            .where(_scope_clause(tenant_id))
            .where(Agreement.status == AgreementStatus.active)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, agreement: Agreement) -> Agreement:
        self.session.add(agreement)
        await self.session.flush()
        await self.session.refresh(agreement)
        return agreement

    async def update(self, agreement: Agreement) -> Agreement:
        self.session.add(agreement)
        await self.session.flush()
        await self.session.refresh(agreement)
        return agreement


class AgreementAcceptanceRepository(IAgreementAcceptanceRepository):
    """AgreementAcceptance repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def exists(
        self, tenant_id: UUID, user_id: UUID, agreement_id: UUID, version: int
    ) -> bool:
        stmt = (
            select(AgreementAcceptance.id)
            .where(AgreementAcceptance.tenant_id == tenant_id)
            .where(AgreementAcceptance.user_id == user_id)
            .where(AgreementAcceptance.agreement_id == agreement_id)
            .where(AgreementAcceptance.version == version)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def get(
        self, tenant_id: UUID, user_id: UUID, agreement_id: UUID, version: int
    ) -> Optional[AgreementAcceptance]:
        stmt = (
            select(AgreementAcceptance)
            .where(AgreementAcceptance.tenant_id == tenant_id)
            .where(AgreementAcceptance.user_id == user_id)
            .where(AgreementAcceptance.agreement_id == agreement_id)
            .where(AgreementAcceptance.version == version)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, acceptance: AgreementAcceptance) -> AgreementAcceptance:
        self.session.add(acceptance)
        await self.session.flush()
        await self.session.refresh(acceptance)
        return acceptance
