"""Strict tenant isolation for already-fetched entities. No FastAPI."""

from typing import Any, Optional

from lms.security.exceptions import TenantIsolationError
from lms.security.principal import Principal


class TenantContext:
    """Validate that request tenant matches resource tenant. Super admins may cross tenants."""

    @staticmethod
    def validate_access(resource_tenant: Optional[int], request_tenant: Optional[int]) -> None:
        """
        If mismatch, raise TenantIsolationError.
        No cross-tenant access allowed.
        """
        if resource_tenant is None or request_tenant is None:
            raise TenantIsolationError(
                "Tenant isolation: resource_tenant and request_tenant must be set"
            )
        if resource_tenant != request_tenant:
            raise TenantIsolationError(
                f"Tenant isolation: access denied. "
                f"Resource tenant '{resource_tenant}' does not match request tenant '{request_tenant}'"
            )

    @classmethod
    def validate_entity(cls, entity: Any, principal: Principal, tenant_field: str = "tenant_id") -> None:
        """Post-fetch check on an entity; a second line behind the tenant scoping interceptor."""
        if principal.is_super_admin:
            return
        cls.validate_access(getattr(entity, tenant_field, None), principal.tenant_id)
