from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.agreement_repository import (
    AgreementAcceptanceRepository,
    AgreementRepository,
)
from src.adapter.repositories.audit_event_repository import AuditEventRepository
from src.adapter.repositories.error_log_repository import ErrorLogRepository
from src.adapter.repositories.record_store import SqlRecordStore
from src.adapter.repositories.tenant_repository import TenantRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.tenants = TenantRepository(self.session)
        self.agreements = AgreementRepository(self.session)
        self.acceptances = AgreementAcceptanceRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        self.error_logs = ErrorLogRepository(self.session)
        self.records = SqlRecordStore(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
