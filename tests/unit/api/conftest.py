"""Fixtures for API unit tests: app bound to an in-memory SQLite schema, AsyncClient, role headers."""

import pytest
from httpx import ASGITransport, AsyncClient

from lms.infrastructure.database.session import get_db
from lms.main import app


@pytest.fixture
def app_with_overrides(session_factory):
    """App whose request sessions come from the test engine."""

    async def _test_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _test_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app_with_overrides, tenants):
    """Async HTTP client for testing; tenants 1 and 2 exist."""
    transport = ASGITransport(app=app_with_overrides)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def headers(role: str, tenant_id=None, user_id: int = 10) -> dict:
    out = {"X-User-ID": str(user_id), "X-User-Role": role}
    if tenant_id is not None:
        out["X-Tenant-ID"] = str(tenant_id)
    return out


@pytest.fixture
def admin_1_headers():
    return headers("TENANT_ADMIN", 1)


@pytest.fixture
def admin_2_headers():
    return headers("TENANT_ADMIN", 2, user_id=20)


@pytest.fixture
def super_admin_headers():
    return headers("SUPER_ADMIN", user_id=1)


@pytest.fixture
def make_headers():
    return headers
