"""
AgreementAcceptance Entity

Records that a user accepted one exact version of an agreement.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class AgreementAcceptance(SQLModel, table=True):
    """
    AgreementAcceptance entity.

    Business Rules:
    - Accepting version N does not satisfy version N+1
    - (tenant_id, user_id, agreement_id, version) is unique
    """

    __tablename__ = "tenant_agreement_acceptances"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)
    user_id: UUID = Field(nullable=False, index=True)
    agreement_id: UUID = Field(foreign_key="tenant_agreements.id", nullable=False)
    version: int = Field(nullable=False)

    ip_address: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)

    accepted_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index(
            "idx_acceptance_unique",
            "tenant_id",
            "user_id",
            "agreement_id",
            "version",
            unique=True,
        ),
    )
