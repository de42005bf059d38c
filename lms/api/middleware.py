"""API middleware: correlation ID, tenant context, audit trigger."""

import json
import logging
import uuid
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from lms.core.context import correlation_id_ctx
from lms.security.principal import Principal, principal_scope
from lms.security.rbac import Role

logger = logging.getLogger(__name__)

TENANT_HEADER = "X-Tenant-ID"
USER_HEADER = "X-User-ID"
ROLE_HEADER = "X-User-Role"
CORRELATION_HEADER = "X-Correlation-ID"

PUBLIC_PATHS = frozenset({"/health"})


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Generate or preserve correlation ID; attach to request.state, response header, and logging context."""

    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id
        token = correlation_id_ctx.set(correlation_id)
        try:
            response = await call_next(request)
        finally:
            correlation_id_ctx.reset(token)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


def _parse_positive_int(raw: Optional[str]) -> Optional[int]:
    if raw is None or not raw.strip().isdigit():
        return None
    value = int(raw.strip())
    return value if value > 0 else None


class TenantContextMiddleware(BaseHTTPMiddleware):
    """
    Resolve the principal from the headers set by the authenticating gateway and run the
    rest of the request inside its isolation scope.
    401 when user or role is missing or unknown; 400 when a non super admin sends no usable
    X-Tenant-ID. A super admin without X-Tenant-ID works with isolation disabled.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request.state.principal = None
        request.state.tenant_id = None
        if request.url.path in PUBLIC_PATHS:
            return await call_next(request)

        user_id = _parse_positive_int(request.headers.get(USER_HEADER))
        role_value = (request.headers.get(ROLE_HEADER) or "").strip().upper()
        if user_id is None or role_value not in Role.__members__:
            return JSONResponse(
                status_code=401,
                content={"detail": f"{USER_HEADER} and {ROLE_HEADER} headers are required"},
            )
        role = Role(role_value)

        raw_tenant = request.headers.get(TENANT_HEADER)
        tenant_id = _parse_positive_int(raw_tenant)
        if raw_tenant is not None and raw_tenant.strip() and tenant_id is None:
            return JSONResponse(
                status_code=400,
                content={"detail": f"{TENANT_HEADER} must be a positive integer"},
            )
        if tenant_id is None and role is not Role.SUPER_ADMIN:
            return JSONResponse(
                status_code=400,
                content={"detail": f"{TENANT_HEADER} header is required"},
            )

        principal = Principal(
            user_id=user_id,
            role=role,
            tenant_id=tenant_id,
            client_ip=request.client.host if request.client else None,
        )
        request.state.principal = principal
        request.state.tenant_id = tenant_id
        with principal_scope(principal):
            return await call_next(request)


class AuditTriggerMiddleware(BaseHTTPMiddleware):
    """After response: log structured audit event (correlation_id, tenant_id, user, path, method, status_code)."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        principal = getattr(request.state, "principal", None)
        audit_event = {
            "event": "request_audit",
            "correlation_id": getattr(request.state, "correlation_id", None),
            "tenant_id": getattr(request.state, "tenant_id", None),
            "user_id": principal.user_id if principal else None,
            "path": request.url.path,
            "method": request.method,
            "status_code": response.status_code,
        }
        logger.info(json.dumps(audit_event))
        return response
