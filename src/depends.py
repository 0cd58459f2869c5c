from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from libs.result import Error
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.utils.jwt import principal_from_token
from src.domain.entities import Principal

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


@asynccontextmanager
async def unit_of_work_scope():
    """Unit of work outside dependency injection (middleware, startup, CLI jobs)."""
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


async def get_current_principal(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Principal:
    """
    Dependency returning the authenticated principal.

    Reuses the principal the request context middleware resolved, falling
    back to decoding the bearer token.

    Raises:
        ClientError: 401 if token is missing, invalid or expired
    """
    principal = getattr(request.state, "principal", None)
    if principal is None and credentials is not None:
        principal = principal_from_token(credentials.credentials)

    if principal is None:
        raise ClientError(
            Error("UNAUTHORIZED", "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return principal


async def require_platform_operator(
    principal: Principal = Depends(get_current_principal),
) -> Principal:
    """
    Raises:
        ClientError: 403 FORBIDDEN for anyone but a platform operator
    """
    if not principal.is_platform_operator:
        raise ClientError(
            Error("FORBIDDEN", "Platform operator access required"),
            status_code=status.HTTP_403_FORBIDDEN,
        )
    return principal
