"""Tests for GET /tenant/context: resolved principal and isolation scope."""

from httpx import AsyncClient


async def test_tenant_context_reports_scope(async_client: AsyncClient, admin_1_headers):
    r = await async_client.get("/tenant/context", headers={**admin_1_headers, "X-Correlation-ID": "corr-1"})
    assert r.status_code == 200
    data = r.json()
    assert data["tenant_id"] == 1
    assert data["role"] == "TENANT_ADMIN"
    assert data["isolation_enabled"] is True
    assert data["active_tenant_id"] == 1
    assert data["correlation_id"] == "corr-1"


async def test_super_admin_without_tenant_runs_unscoped(async_client: AsyncClient, super_admin_headers):
    r = await async_client.get("/tenant/context", headers=super_admin_headers)
    assert r.status_code == 200
    data = r.json()
    assert data["tenant_id"] is None
    assert data["isolation_enabled"] is False
