# lms/api/routers/tenant.py

from fastapi import APIRouter, Request

from lms.core.context import current_isolation

router = APIRouter()


@router.get("/context")
async def tenant_context(request: Request):
    """Return the resolved principal and isolation scope for debugging tenant propagation."""
    isolation = current_isolation()
    principal = request.state.principal
    return {
        "tenant_id": request.state.tenant_id,
        "user_id": principal.user_id,
        "role": principal.role.value,
        "isolation_enabled": isolation.is_enabled,
        "active_tenant_id": isolation.active_tenant_id,
        "correlation_id": request.state.correlation_id,
    }
