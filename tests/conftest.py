"""Shared fixtures: in-memory SQLite schema, isolation pipeline, isolated database client."""

from datetime import datetime, timezone

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from lms.infrastructure.database import models  # noqa: F401  registers tables
from lms.infrastructure.database.client import IsolatedDatabase
from lms.infrastructure.database.session import Base
from lms.isolation.pipeline import IsolationPipeline
from lms.isolation.policy import SoftDeletePolicy, TenantScopingPolicy
from lms.observability.metrics import MetricsCollector

FIXED_NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def soft_delete_policy():
    return SoftDeletePolicy()


@pytest.fixture
def tenant_policy():
    return TenantScopingPolicy()


@pytest.fixture
def metrics():
    return MetricsCollector()


@pytest.fixture
def pipeline(soft_delete_policy, tenant_policy, metrics):
    return IsolationPipeline(
        soft_delete_policy,
        tenant_policy,
        metrics=metrics,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def db(session, pipeline):
    return IsolatedDatabase(session, pipeline)


@pytest.fixture
async def tenants(session):
    """Two tenants, ids 1 and 2."""
    session.add_all([models.Tenant(tenant_name="Acme"), models.Tenant(tenant_name="Globex")])
    await session.commit()
    return 1, 2
