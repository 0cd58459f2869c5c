from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import inspect, text
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.record_store import IRecordStore
from src.app.services.tenant_tables import TENANT_COLUMN, is_safe_identifier


def _quote(identifier: str) -> str:
    # Identifiers come from the fixed table registry; anything else is refused
    # before it can reach a raw statement.
    if not is_safe_identifier(identifier):
        raise ValueError(f"Unsafe SQL identifier: {identifier!r}")
    return f'"{identifier}"'


class SqlRecordStore(IRecordStore):
    """Record store over raw SQL, so tenant-scoped tables need no ORM models here"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def table_exists(self, table: str) -> bool:
        def _has_table(sync_session) -> bool:
            return inspect(sync_session.connection()).has_table(table)

        return await self.session.run_sync(_has_table)

    async def column_exists(self, table: str, column: str) -> bool:
        def _has_column(sync_session) -> bool:
            inspector = inspect(sync_session.connection())
            if not inspector.has_table(table):
                return False
            return any(c["name"] == column for c in inspector.get_columns(table))

        return await self.session.run_sync(_has_column)

    async def count_missing_tenant(self, table: str) -> int:
        stmt = text(
            f"SELECT COUNT(*) FROM {_quote(table)} WHERE {_quote(TENANT_COLUMN)} IS NULL"
        )
        result = await self.session.execute(stmt)
        return int(result.scalar() or 0)

    async def sample_missing_tenant(
        self, table: str, display_column: Optional[str], limit: int
    ) -> List[Dict[str, Optional[str]]]:
        display = _quote(display_column) if display_column else "NULL"
        stmt = text(
            f"SELECT id, {display} AS display FROM {_quote(table)} "
            f"WHERE {_quote(TENANT_COLUMN)} IS NULL LIMIT :limit"
        )
        result = await self.session.execute(stmt, {"limit": limit})
        return [
            {
                "id": str(row.id),
                "display": str(row.display) if row.display is not None else None,
            }
            for row in result
        ]

    async def assign_tenant_to_missing(self, table: str, tenant_id: UUID) -> int:
        stmt = text(
            f"UPDATE {_quote(table)} SET {_quote(TENANT_COLUMN)} = :tenant_id "
            f"WHERE {_quote(TENANT_COLUMN)} IS NULL"
        )
        result = await self.session.execute(stmt, {"tenant_id": str(tenant_id)})
        return result.rowcount or 0

    async def count_by_tenant(self, table: str, tenant_id: UUID) -> int:
        stmt = text(
            f"SELECT COUNT(*) FROM {_quote(table)} WHERE {_quote(TENANT_COLUMN)} = :tenant_id"
        )
        result = await self.session.execute(stmt, {"tenant_id": str(tenant_id)})
        return int(result.scalar() or 0)

    async def delete_all(self, table: str) -> int:
        result = await self.session.execute(text(f"DELETE FROM {_quote(table)}"))
        return result.rowcount or 0
