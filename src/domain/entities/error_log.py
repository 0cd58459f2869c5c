"""
ErrorLog Entity

Server-side record of captured failures, correlated by request id.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel, Text


class ErrorLog(SQLModel, table=True):
    """
    ErrorLog entity.

    Business Rules:
    - Message, stack and meta are redacted before insert
    - Stack traces never leave the server
    - request_id is always set for correlation
    """

    __tablename__ = "error_logs"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    request_id: str = Field(max_length=100, index=True)

    tenant_id: Optional[UUID] = Field(default=None, index=True)
    user_id: Optional[UUID] = Field(default=None)

    method: str = Field(max_length=16)
    path: str = Field(max_length=1024)
    status: int = Field(index=True)

    error_name: Optional[str] = Field(default=None, max_length=255)
    message: str = Field(sa_column=Column(Text, nullable=False))
    stack: Optional[str] = Field(default=None, sa_column=Column(Text))
    db_code: Optional[str] = Field(default=None, max_length=32)
    db_constraint: Optional[str] = Field(default=None, max_length=255)
    meta: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    environment: str = Field(default="development", max_length=32)
    resolved: bool = Field(default=False)

    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_error_logs_created_at", "created_at"),)
