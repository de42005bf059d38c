"""Specializations: tenant-scoped catalogue entries, name unique per tenant."""

from typing import Any, Mapping, Optional

from lms.application.entity_service import EntityService
from lms.application.exceptions import ConflictError


class SpecializationService(EntityService):
    model = "Specialization"
    primary_key = "specialization_id"
    resource_type = "specialization"

    async def _validate_create(self, data: Mapping[str, Any]) -> None:
        await self._ensure_unique_name(data.get("specialization_name"), data.get("tenant_id"))

    async def _validate_update(self, entity: Any, data: Mapping[str, Any]) -> None:
        if "specialization_name" in data:
            await self._ensure_unique_name(
                data["specialization_name"],
                tenant_id=entity.tenant_id,
                exclude_id=entity.specialization_id,
            )

    async def _ensure_unique_name(
        self,
        name: Optional[str],
        tenant_id: Optional[int] = None,
        exclude_id: Optional[int] = None,
    ) -> None:
        if not name:
            return
        # the tenant filter is added by the interceptor; an explicit tenant_id only
        # matters for a cross-tenant caller creating on behalf of a tenant
        where: dict = {"specialization_name": name}
        if tenant_id is not None:
            where["tenant_id"] = tenant_id
        if exclude_id is not None:
            where[self.primary_key] = {"not": exclude_id}
        if await self.repo.count(where=where) > 0:
            raise ConflictError(f"Specialization '{name}' already exists")
