from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.error_log_repository import IErrorLogRepository
from src.domain.entities import ErrorLog


class ErrorLogRepository(IErrorLogRepository):
    """ErrorLog repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, error_log: ErrorLog) -> ErrorLog:
        self.session.add(error_log)
        await self.session.flush()
        return error_log
