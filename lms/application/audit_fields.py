"""Who/when/where stamping for created, updated and soft-deleted rows."""

from datetime import datetime, timezone
from typing import Any, Dict

from lms.security.principal import Principal


def create_audit_fields(principal: Principal) -> Dict[str, Any]:
    return {
        "created_by": principal.user_id,
        "created_ip": principal.client_ip,
        "is_active": True,
        "is_deleted": False,
    }


def update_audit_fields(principal: Principal) -> Dict[str, Any]:
    return {
        "updated_by": principal.user_id,
        "updated_ip": principal.client_ip,
        "updated_at": datetime.now(timezone.utc),
    }


def delete_audit_fields(principal: Principal) -> Dict[str, Any]:
    """Extra payload for a delete; the soft-delete interceptor adds is_deleted and deleted_at."""
    return {
        "is_active": False,
        "deleted_by": principal.user_id,
        **update_audit_fields(principal),
    }
