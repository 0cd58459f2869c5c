from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from uuid import UUID


class IRecordStore(ABC):
    """
    Record store interface - generic access to tenant-scoped tables.

    Tables are addressed by name and share a nullable tenant_id column.
    Domain shapes beyond that column are not known here.
    """

    @abstractmethod
    async def table_exists(self, table: str) -> bool:
        """Check the live schema for a table"""
        pass

    @abstractmethod
    async def column_exists(self, table: str, column: str) -> bool:
        """Check the live schema for a column"""
        pass

    @abstractmethod
    async def count_missing_tenant(self, table: str) -> int:
        """Count rows whose tenant_id is NULL"""
        pass

    @abstractmethod
    async def sample_missing_tenant(
        self, table: str, display_column: Optional[str], limit: int
    ) -> List[Dict[str, Optional[str]]]:
        """Return up to `limit` orphan rows as {"id", "display"} dicts"""
        pass

    @abstractmethod
    async def assign_tenant_to_missing(self, table: str, tenant_id: UUID) -> int:
        """Set tenant_id on every NULL row, returning the number of rows changed"""
        pass

    @abstractmethod
    async def count_by_tenant(self, table: str, tenant_id: UUID) -> int:
        """Count rows belonging to a tenant"""
        pass

    @abstractmethod
    async def delete_all(self, table: str) -> int:
        """Delete every row of a table, returning the number of rows deleted"""
        pass
