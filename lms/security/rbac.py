"""Role-based access control. No FastAPI."""

from enum import Enum

from lms.security.exceptions import AuthorizationError


class Role(str, Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    TENANT_ADMIN = "TENANT_ADMIN"
    TEACHER = "TEACHER"
    STUDENT = "STUDENT"


# Permission matrix:
# Role          View  Create  Update  Delete  Manage Tenants
# SUPER_ADMIN   ✓     ✓       ✓       ✓       ✓
# TENANT_ADMIN  ✓     ✓       ✓       ✓       ✗
# TEACHER       ✓     ✓       ✓       ✗       ✗
# STUDENT       ✓     ✗       ✗       ✗       ✗

_ACTIONS = ("view", "create", "update", "delete", "manage_tenants")

_GRANTS: dict[Role, frozenset[str]] = {
    Role.SUPER_ADMIN: frozenset(_ACTIONS),
    Role.TENANT_ADMIN: frozenset({"view", "create", "update", "delete"}),
    Role.TEACHER: frozenset({"view", "create", "update"}),
    Role.STUDENT: frozenset({"view"}),
}


class RBACService:
    """Check permission for role and action. Raise AuthorizationError if invalid."""

    def check_permission(self, role: Role, action: str) -> None:
        """Raises AuthorizationError if role does not have permission for action."""
        if action not in _GRANTS.get(role, frozenset()):
            raise AuthorizationError(
                f"Role {role.value} does not have permission for action '{action}'"
            )
