"""Fixtures for service tests: real SQLite-backed isolated database, DB audit trail."""

import pytest

from lms.application.course_service import CourseService
from lms.application.specialization_service import SpecializationService
from lms.application.tenant_service import TenantService
from lms.governance.audit_logger import AuditLogger
from lms.infrastructure.database.audit_repository_db import DbAuditRepository
from lms.security.principal import Principal
from lms.security.rbac import Role


@pytest.fixture
def audit_logger(db):
    return AuditLogger(DbAuditRepository(db))


@pytest.fixture
def specialization_service(db, audit_logger):
    return SpecializationService(db, audit_logger)


@pytest.fixture
def course_service(db, audit_logger):
    return CourseService(db, audit_logger)


@pytest.fixture
def tenant_service(db, audit_logger):
    return TenantService(db, audit_logger)


@pytest.fixture
def admin_1():
    return Principal(user_id=10, role=Role.TENANT_ADMIN, tenant_id=1, client_ip="10.0.0.1")


@pytest.fixture
def admin_2():
    return Principal(user_id=20, role=Role.TENANT_ADMIN, tenant_id=2)


@pytest.fixture
def super_admin():
    return Principal(user_id=1, role=Role.SUPER_ADMIN)
