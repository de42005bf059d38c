"""
Base CRUD service over one model. Every call runs inside the caller's isolation scope
and goes through IsolatedDatabase, so tenant filtering and soft-delete come from the
interceptors rather than from hand-written predicates.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from lms.application.audit_fields import (
    create_audit_fields,
    delete_audit_fields,
    update_audit_fields,
)
from lms.application.exceptions import NotFoundError
from lms.core.context import is_active
from lms.domain.exceptions import DomainValidationError
from lms.governance.audit_logger import AuditLogger
from lms.infrastructure.database.client import IsolatedDatabase, ModelDelegate
from lms.security.exceptions import TenantIsolationError
from lms.security.principal import Principal, principal_scope
from lms.security.tenant_context import TenantContext

DEFAULT_PAGE_SIZE = 50


class EntityService:
    model: str = ""
    primary_key: str = ""
    resource_type: str = ""
    # rows carry a tenant_id the tenant scoping interceptor fills in
    tenant_scoped: bool = True

    def __init__(
        self,
        db: IsolatedDatabase,
        audit_logger: AuditLogger,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._db = db
        self._audit_logger = audit_logger
        self._logger = logger or logging.getLogger(__name__)

    @property
    def repo(self) -> ModelDelegate:
        return self._db.model(self.model)

    def _key(self, entity_id: int) -> Dict[str, Any]:
        return {self.primary_key: entity_id}

    # ---------- reads ----------

    async def get(self, principal: Principal, entity_id: int):
        with principal_scope(principal):
            return await self._get(principal, entity_id)

    async def _get(self, principal: Principal, entity_id: int):
        entity = await self.repo.find_first(where=self._key(entity_id))
        if entity is None or not self._visible_to(principal, entity):
            raise NotFoundError(f"{self.resource_type} not found")
        return entity

    async def list(
        self,
        principal: Principal,
        *,
        where: Optional[Mapping[str, Any]] = None,
        skip: int = 0,
        take: int = DEFAULT_PAGE_SIZE,
    ) -> List[Any]:
        with principal_scope(principal):
            return await self.repo.find_many(
                where=dict(where or {}),
                order_by={self.primary_key: "asc"},
                skip=skip,
                take=take,
            )

    async def count(self, principal: Principal, where: Optional[Mapping[str, Any]] = None) -> int:
        with principal_scope(principal):
            return await self.repo.count(where=dict(where or {}))

    async def list_deleted(self, principal: Principal) -> List[Any]:
        """Explicit is_deleted override: the soft-delete interceptor leaves it alone."""
        with principal_scope(principal):
            return await self.repo.find_many(
                where={"is_deleted": True},
                order_by={self.primary_key: "asc"},
            )

    # ---------- writes ----------

    async def create(self, principal: Principal, data: Mapping[str, Any]):
        with principal_scope(principal):
            if self.tenant_scoped and not is_active() and "tenant_id" not in data:
                raise DomainValidationError(
                    f"tenant_id is required to create a {self.resource_type} outside a tenant scope"
                )
            await self._validate_create(data)
            entity = await self.repo.create(data={**data, **create_audit_fields(principal)})
            await self._audit(principal, "create", entity)
            self._logger.info(
                "entity_created",
                extra={"resource_type": self.resource_type, "resource_id": self._id_of(entity)},
            )
            return entity

    async def update(self, principal: Principal, entity_id: int, data: Mapping[str, Any]):
        with principal_scope(principal):
            current = await self._get(principal, entity_id)
            await self._validate_update(current, data)
            entity = await self.repo.update(
                where=self._key(entity_id),
                data={**data, **update_audit_fields(principal)},
            )
            await self._audit(principal, "update", entity, metadata={"fields": sorted(data)})
            return entity

    async def delete(self, principal: Principal, entity_id: int) -> None:
        """Soft delete: the interceptor turns this into an update setting is_deleted/deleted_at."""
        with principal_scope(principal):
            await self._get(principal, entity_id)
            entity = await self.repo.delete(
                where=self._key(entity_id),
                data=delete_audit_fields(principal),
            )
            await self._audit(principal, "delete", entity)
            self._logger.info(
                "entity_deleted",
                extra={"resource_type": self.resource_type, "resource_id": entity_id},
            )

    async def restore(self, principal: Principal, entity_id: int):
        with principal_scope(principal):
            deleted = await self.repo.find_first(where={**self._key(entity_id), "is_deleted": True})
            if deleted is None or not self._visible_to(principal, deleted):
                raise NotFoundError(f"Deleted {self.resource_type} not found")
            entity = await self.repo.update(
                where=self._key(entity_id),
                data={
                    "is_deleted": False,
                    "is_active": True,
                    "deleted_at": None,
                    "deleted_by": None,
                    **update_audit_fields(principal),
                },
            )
            await self._audit(principal, "restore", entity)
            return entity

    # ---------- hooks ----------

    async def _validate_create(self, data: Mapping[str, Any]) -> None:
        """Business checks before insert. Runs inside the caller's scope."""

    async def _validate_update(self, entity: Any, data: Mapping[str, Any]) -> None:
        """Business checks before update. Receives the row as currently stored."""

    # ---------- helpers ----------

    def _visible_to(self, principal: Principal, entity: Any) -> bool:
        """
        Post-fetch tenant check. A tenant_id in the lookup key (the Tenant model's
        primary key) overrides the scoping filter, so the fetched row is checked here.
        Another tenant's row reads as missing.
        """
        if not hasattr(entity, "tenant_id"):
            return True
        try:
            TenantContext.validate_entity(entity, principal)
        except TenantIsolationError:
            self._logger.warning(
                "cross_tenant_access_denied",
                extra={"resource_type": self.resource_type, "resource_id": self._id_of(entity)},
            )
            return False
        return True

    def _id_of(self, entity: Any) -> Any:
        return getattr(entity, self.primary_key)

    async def _audit(
        self,
        principal: Principal,
        action: str,
        entity: Any,
        metadata: Optional[dict] = None,
    ) -> None:
        await self._audit_logger.log_action(
            actor=principal.user_id,
            tenant_id=getattr(entity, "tenant_id", None),
            action=action,
            resource_type=self.resource_type,
            resource_id=str(self._id_of(entity)),
            metadata=metadata,
        )
