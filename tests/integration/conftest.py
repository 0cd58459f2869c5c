from contextlib import asynccontextmanager
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.tenant_tables import BACKFILL_ORDER, ORPHAN_SCAN_TABLES
from src.depends import get_unit_of_work
from src.domain.entities import Tenant, TenantStatus
from tests.integration.helpers import StrictConfig

SCOPED_TABLE_NAMES = sorted(
    {t.name for t in ORPHAN_SCAN_TABLES} | set(BACKFILL_ORDER) | {"notifications", "tenant_settings"}
)


async def _drop_scoped_tables(conn):
    # Tenant-scoped tables are created per test with raw DDL
    for table in SCOPED_TABLE_NAMES:
        await conn.execute(text(f'DROP TABLE IF EXISTS "{table}"'))


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await _drop_scoped_tables(conn)
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await _drop_scoped_tables(conn)
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def uow_scope(session_factory):
    """Unit of work on its own session, the way the app and the CLIs open one."""

    @asynccontextmanager
    async def scope():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    return scope


@pytest.fixture
def app_factory(session_factory, uow_scope):
    from src.api.app import create_app

    async def override_get_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    def build(config=StrictConfig):
        app = create_app(config, uow_scope=uow_scope)
        app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
        return app

    return build


@pytest.fixture
def app(app_factory):
    return app_factory()


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def create_scoped_table(db_session):
    """Create a tenant-scoped table with an id, a display column and tenant_id."""

    async def create(name, display_column="name", rows=()):
        await db_session.execute(
            text(
                f'CREATE TABLE "{name}" (id TEXT PRIMARY KEY, "{display_column}" TEXT, tenant_id TEXT)'
            )
        )
        for row_id, display, tenant_id in rows:
            await db_session.execute(
                text(
                    f'INSERT INTO "{name}" (id, "{display_column}", tenant_id) '
                    f"VALUES (:id, :display, :tenant_id)"
                ),
                {"id": row_id, "display": display, "tenant_id": tenant_id},
            )
        await db_session.commit()

    return create


@pytest.fixture
def make_tenant(db_session):
    async def create(status=TenantStatus.active, slug=None, name="Acme Corp"):
        tenant = Tenant(name=name, slug=slug or f"tenant-{uuid4().hex[:8]}", status=status)
        db_session.add(tenant)
        await db_session.commit()
        return tenant

    return create
