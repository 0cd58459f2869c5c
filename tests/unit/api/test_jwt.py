"""
Unit tests for bearer token decoding
"""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest
from jose import jwt

from config import ApplicationConfig
from src.api.utils.jwt import bearer_token, generate_jwt, principal_from_token
from src.domain.entities import PrincipalRole


def sign(claims):
    claims = {"exp": datetime.now(UTC) + timedelta(minutes=5), **claims}
    return jwt.encode(claims, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def test_principal_from_valid_token():
    user_id = uuid4()
    tenant_id = uuid4()

    principal = principal_from_token(generate_jwt(user_id, tenant_id, "admin"))

    assert principal.user_id == user_id
    assert principal.tenant_id == tenant_id
    assert principal.role == PrincipalRole.admin


@pytest.mark.parametrize(
    "claims",
    [
        {"tenant_id": None, "role": "admin"},
        {"user_id": "not-a-uuid", "role": "admin"},
        {"user_id": str(uuid4()), "role": "owner"},
        {"user_id": 123, "role": "admin"},
        {"user_id": str(uuid4()), "tenant_id": ["x"], "role": "admin"},
    ],
)
def test_malformed_claims_yield_no_principal(claims):
    assert principal_from_token(sign(claims)) is None


def test_bad_signature_and_missing_token():
    token = jwt.encode({"user_id": str(uuid4()), "role": "admin"}, "other-secret", algorithm="HS256")

    assert principal_from_token(token) is None
    assert principal_from_token(None) is None


def test_bearer_token_parsing():
    assert bearer_token("Bearer abc") == "abc"
    assert bearer_token("Basic abc") is None
    assert bearer_token(None) is None
