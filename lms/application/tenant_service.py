"""Tenants. Reads follow the caller's scope; provisioning runs with isolation disabled."""

from typing import Any, Mapping

from lms.application.audit_fields import create_audit_fields, delete_audit_fields
from lms.application.entity_service import EntityService
from lms.core.context import system_scope
from lms.security.principal import Principal


class TenantService(EntityService):
    """
    A tenant admin listing tenants sees only their own row: Tenant is not exempt
    from tenant scoping and its primary key is the tenant_id column.
    Creating or deleting a tenant is a system operation.
    """

    model = "Tenant"
    primary_key = "tenant_id"
    resource_type = "tenant"
    tenant_scoped = False

    async def create(self, principal: Principal, data: Mapping[str, Any]):
        with system_scope():
            entity = await self.repo.create(data={**data, **create_audit_fields(principal)})
            await self._audit(principal, "create", entity)
        self._logger.info("tenant_created", extra={"created_tenant_id": entity.tenant_id})
        return entity

    async def delete(self, principal: Principal, entity_id: int) -> None:
        with system_scope():
            await self._get(principal, entity_id)
            entity = await self.repo.delete(
                where=self._key(entity_id),
                data=delete_audit_fields(principal),
            )
            await self._audit(principal, "delete", entity)
        self._logger.info("tenant_deleted", extra={"deleted_tenant_id": entity_id})
