# lms/main.py

import logging

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from lms.api.middleware import (
    AuditTriggerMiddleware,
    CorrelationIdMiddleware,
    TenantContextMiddleware,
)
from lms.api.routers import courses, health, specializations, tenant, tenants
from lms.application.exceptions import ApplicationError, ConflictError, NotFoundError
from lms.config.logging import configure_logging
from lms.config.settings import get_settings
from lms.domain.exceptions import DomainError, DomainValidationError
from lms.infrastructure.database.exceptions import (
    DatabaseError,
    InvalidPredicateError,
    RecordNotFoundError,
    UnknownFieldError,
)
from lms.security.exceptions import (
    AuthenticationError,
    AuthorizationError,
    IsolationRewriteError,
    TenantIsolationError,
)

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    debug=settings.debug,
)

# Middleware order: last added runs first (outermost). Request flow: CorrelationId -> TenantContext -> AuditTrigger.
app.add_middleware(AuditTriggerMiddleware)
app.add_middleware(TenantContextMiddleware)
app.add_middleware(CorrelationIdMiddleware)


@app.exception_handler(DomainValidationError)
async def domain_validation_error_handler(request, exc: DomainValidationError):
    return JSONResponse(status_code=422, content={"detail": exc.message})


@app.exception_handler(DomainError)
async def domain_error_handler(request, exc: DomainError):
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(AuthenticationError)
async def authentication_error_handler(request, exc: AuthenticationError):
    return JSONResponse(status_code=401, content={"detail": exc.message})


@app.exception_handler(AuthorizationError)
async def authorization_error_handler(request, exc: AuthorizationError):
    return JSONResponse(status_code=403, content={"detail": exc.message})


@app.exception_handler(TenantIsolationError)
async def tenant_isolation_error_handler(request, exc: TenantIsolationError):
    return JSONResponse(status_code=403, content={"detail": exc.message})


@app.exception_handler(IsolationRewriteError)
async def isolation_rewrite_error_handler(request, exc: IsolationRewriteError):
    # the operation was rejected before reaching the database; do not leak the rewrite detail
    logger.error(
        "request_rejected_by_isolation",
        extra={"interceptor": exc.interceptor, "model": exc.model},
    )
    return JSONResponse(status_code=500, content={"detail": "Data access could not be isolated"})


@app.exception_handler(NotFoundError)
async def not_found_error_handler(request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(RecordNotFoundError)
async def record_not_found_error_handler(request, exc: RecordNotFoundError):
    return JSONResponse(status_code=404, content={"detail": "Not found"})


@app.exception_handler(ConflictError)
async def conflict_error_handler(request, exc: ConflictError):
    return JSONResponse(status_code=409, content={"detail": exc.message})


@app.exception_handler(UnknownFieldError)
async def unknown_field_error_handler(request, exc: UnknownFieldError):
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(InvalidPredicateError)
async def invalid_predicate_error_handler(request, exc: InvalidPredicateError):
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(ApplicationError)
async def application_error_handler(request, exc: ApplicationError):
    return JSONResponse(status_code=500, content={"detail": exc.message})


@app.exception_handler(DatabaseError)
async def database_error_handler(request, exc: DatabaseError):
    return JSONResponse(status_code=500, content={"detail": "Database error"})


@app.exception_handler(Exception)
async def unexpected_error_handler(request, exc: Exception):
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


# Routers: /health, /tenant, /tenants, /specializations, /courses
app.include_router(health.router)
app.include_router(tenant.router, prefix="/tenant")
app.include_router(tenants.router, prefix="/tenants")
app.include_router(specializations.router, prefix="/specializations")
app.include_router(courses.router, prefix="/courses")
