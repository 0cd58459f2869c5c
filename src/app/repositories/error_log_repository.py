from abc import ABC, abstractmethod

from src.domain.entities import ErrorLog


class IErrorLogRepository(ABC):
    """ErrorLog repository interface - application layer"""

    @abstractmethod
    async def create(self, error_log: ErrorLog) -> ErrorLog:
        """Persist an already-redacted error log row"""
        pass
