"""
Tenant Entity

Represents an isolated customer organization, the unit of data partitioning.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import TenantStatus


class Tenant(SQLModel, table=True):
    """
    Tenant entity - isolated workspace for organizations.

    Business Rules:
    - Slug is unique and stable (used to locate sentinel tenants)
    - Suspension blocks every non-exempt request, including tenant admins
    - Inactive tenants have not completed onboarding
    """

    __tablename__ = "tenants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    slug: str = Field(unique=True, index=True, max_length=100)

    status: TenantStatus = Field(default=TenantStatus.inactive)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_tenant_status", "status"),)
