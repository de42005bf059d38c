"""Authenticated caller, as resolved from gateway headers."""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from lms.core.context import IsolationContext, system_scope, tenant_scope
from lms.security.rbac import Role


@dataclass(frozen=True)
class Principal:
    user_id: int
    role: Role
    tenant_id: Optional[int] = None
    client_ip: Optional[str] = None

    @property
    def is_super_admin(self) -> bool:
        return self.role is Role.SUPER_ADMIN

    @property
    def is_cross_tenant(self) -> bool:
        """A super admin with no tenant selected works across all tenants."""
        return self.is_super_admin and self.tenant_id is None


@contextmanager
def principal_scope(principal: Principal) -> Iterator[IsolationContext]:
    """Enter the isolation scope the principal is entitled to; restored on exit."""
    if principal.is_cross_tenant:
        with system_scope() as ctx:
            yield ctx
    else:
        with tenant_scope(principal.tenant_id) as ctx:
            yield ctx
