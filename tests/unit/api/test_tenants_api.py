"""Tenants API: provisioning requires manage_tenants; tenant admins see their own tenant only."""

from httpx import AsyncClient


async def test_super_admin_provisions_tenant(async_client: AsyncClient, super_admin_headers):
    r = await async_client.post("/tenants/", json={"tenant_name": "Initech"}, headers=super_admin_headers)
    assert r.status_code == 201, r.text
    assert r.json()["tenant_id"] == 3
    listing = (await async_client.get("/tenants/", headers=super_admin_headers)).json()
    assert [t["tenant_name"] for t in listing] == ["Acme", "Globex", "Initech"]


async def test_tenant_admin_cannot_provision(async_client, admin_1_headers):
    r = await async_client.post("/tenants/", json={"tenant_name": "Initech"}, headers=admin_1_headers)
    assert r.status_code == 403


async def test_tenant_admin_sees_own_tenant(async_client, admin_2_headers):
    listing = (await async_client.get("/tenants/", headers=admin_2_headers)).json()
    assert [t["tenant_id"] for t in listing] == [2]
    assert (await async_client.get("/tenants/1", headers=admin_2_headers)).status_code == 404


async def test_super_admin_soft_deletes_tenant(async_client, super_admin_headers):
    r = await async_client.delete("/tenants/2", headers=super_admin_headers)
    assert r.status_code == 204
    listing = (await async_client.get("/tenants/", headers=super_admin_headers)).json()
    assert [t["tenant_id"] for t in listing] == [1]
