"""FastAPI dependency injection: isolated database, services, principal, correlation_id."""

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from lms.application.course_service import CourseService
from lms.application.specialization_service import SpecializationService
from lms.application.tenant_service import TenantService
from lms.config.settings import get_settings
from lms.governance.audit_logger import AuditLogger
from lms.infrastructure.database.audit_repository_db import DbAuditRepository
from lms.infrastructure.database.client import IsolatedDatabase
from lms.infrastructure.database.session import get_db
from lms.isolation.pipeline import IsolationFailureMode, IsolationPipeline
from lms.isolation.policy import SoftDeletePolicy, TenantScopingPolicy
from lms.observability.metrics import MetricsCollector
from lms.security.exceptions import AuthenticationError
from lms.security.principal import Principal
from lms.security.rbac import RBACService


@lru_cache
def get_pipeline() -> IsolationPipeline:
    """Return the process-wide isolation pipeline built from settings."""
    settings = get_settings()
    return IsolationPipeline(
        SoftDeletePolicy.from_settings(settings),
        TenantScopingPolicy.from_settings(settings),
        failure_mode=IsolationFailureMode(settings.isolation_failure_mode),
        metrics=MetricsCollector(),
        logger=logging.getLogger("lms.isolation"),
    )


async def get_database(
    session: Annotated[AsyncSession, Depends(get_db)],
    pipeline: Annotated[IsolationPipeline, Depends(get_pipeline)],
) -> IsolatedDatabase:
    return IsolatedDatabase(session, pipeline)


def get_rbac() -> RBACService:
    return RBACService()


def get_audit_logger(db: Annotated[IsolatedDatabase, Depends(get_database)]) -> AuditLogger:
    return AuditLogger(DbAuditRepository(db))


def get_specialization_service(
    db: Annotated[IsolatedDatabase, Depends(get_database)],
    audit_logger: Annotated[AuditLogger, Depends(get_audit_logger)],
) -> SpecializationService:
    return SpecializationService(db, audit_logger, logging.getLogger(__name__))


def get_course_service(
    db: Annotated[IsolatedDatabase, Depends(get_database)],
    audit_logger: Annotated[AuditLogger, Depends(get_audit_logger)],
) -> CourseService:
    return CourseService(db, audit_logger, logging.getLogger(__name__))


def get_tenant_service(
    db: Annotated[IsolatedDatabase, Depends(get_database)],
    audit_logger: Annotated[AuditLogger, Depends(get_audit_logger)],
) -> TenantService:
    return TenantService(db, audit_logger, logging.getLogger(__name__))


def get_principal(request: Request) -> Principal:
    """Extract the principal from request.state (set by middleware)."""
    principal = getattr(request.state, "principal", None)
    if principal is None:
        raise AuthenticationError("Request has no authenticated principal")
    return principal


def get_correlation_id(request: Request) -> str:
    """Extract correlation_id from request.state (set by middleware)."""
    return getattr(request.state, "correlation_id", "") or ""


def require(action: str):
    """Dependency factory: the caller's role must be allowed `action`."""

    def _check(
        principal: Annotated[Principal, Depends(get_principal)],
        rbac: Annotated[RBACService, Depends(get_rbac)],
    ) -> Principal:
        rbac.check_permission(principal.role, action)
        return principal

    return _check
