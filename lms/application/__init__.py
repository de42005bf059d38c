# Application layer: services that run every data call through the isolated database client.

from lms.application.course_service import CourseService
from lms.application.entity_service import EntityService
from lms.application.exceptions import (
    ApplicationError,
    ConflictError,
    NotFoundError,
)
from lms.application.specialization_service import SpecializationService
from lms.application.tenant_service import TenantService

__all__ = [
    "CourseService",
    "EntityService",
    "SpecializationService",
    "TenantService",
    "ApplicationError",
    "ConflictError",
    "NotFoundError",
]
