from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig
from src.domain.entities import Principal


def generate_jwt(
    user_id: UUID,
    tenant_id: Optional[UUID],
    role: str,
    expires_delta: timedelta = timedelta(minutes=15),
) -> str:
    """
    Generate JWT access token

    Tokens are normally issued by the identity service; this is used by
    tooling and tests.

    Args:
        user_id: User UUID
        tenant_id: Tenant UUID, None for platform operators without a tenant
        role: super_user, admin, employee or client

    Returns:
        JWT token string (HS256)
    """
    now = datetime.now(UTC)
    payload = {
        "user_id": str(user_id),
        "tenant_id": str(tenant_id) if tenant_id else None,
        "role": role,
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=["HS256"]
        )
        return payload
    except JWTError:
        return None


def principal_from_token(token: Optional[str]) -> Optional[Principal]:
    """Decode a bearer token into a Principal, None when absent or invalid."""
    if not token:
        return None
    payload = verify_jwt(token)
    if payload is None:
        return None
    try:
        return Principal.from_claims(payload)
    except (KeyError, ValueError, TypeError, AttributeError):
        return None


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()
