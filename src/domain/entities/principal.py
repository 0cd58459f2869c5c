"""
Principal Value Object

The authenticated caller as seen by the guards. Not persisted.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel

from .enums import PrincipalRole


class Principal(BaseModel):
    user_id: UUID
    tenant_id: Optional[UUID] = None
    role: PrincipalRole

    @property
    def is_platform_operator(self) -> bool:
        return self.role == PrincipalRole.super_user

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "Principal":
        """Build a principal from a decoded JWT payload."""
        tenant_id = claims.get("tenant_id")
        return cls(
            user_id=UUID(claims["user_id"]),
            tenant_id=UUID(tenant_id) if tenant_id else None,
            role=PrincipalRole(claims["role"]),
        )
