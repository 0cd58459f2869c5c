import pytest
from uuid import uuid4

from src.domain.entities import TenantStatus
from tests.integration.helpers import auth_headers


@pytest.mark.asyncio
async def test_me_returns_context(client, make_tenant):
    tenant = await make_tenant(TenantStatus.active, slug="acme", name="Acme Corp")
    user_id = uuid4()

    response = await client.get("/api/v1/me", headers=auth_headers(user_id, tenant.id, "admin"))

    assert response.status_code == 200
    assert response.json() == {
        "user": {"id": str(user_id), "role": "admin", "is_platform_operator": False},
        "tenant": {
            "id": str(tenant.id),
            "name": "Acme Corp",
            "slug": "acme",
            "status": "active",
        },
    }


@pytest.mark.asyncio
async def test_me_requires_valid_token(client):
    missing = await client.get("/api/v1/me")
    invalid = await client.get("/api/v1/me", headers={"Authorization": "Bearer not-a-jwt"})

    assert missing.status_code == 401
    assert invalid.status_code == 401
    assert invalid.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_me_unknown_tenant(client):
    """Unknown tenants pass the guards and fail in the route"""
    response = await client.get(
        "/api/v1/me", headers=auth_headers(uuid4(), uuid4(), "employee")
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "TENANT_NOT_FOUND"
