"""Security: RBAC, principal, tenant isolation checks. No FastAPI."""

from lms.security.principal import Principal
from lms.security.rbac import RBACService, Role
from lms.security.tenant_context import TenantContext

__all__ = [
    "Principal",
    "RBACService",
    "Role",
    "TenantContext",
]
