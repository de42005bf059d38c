"""Domain schemas. Request/response and validation."""

from lms.domain.schemas.course import (
    CourseCreateRequest,
    CourseResponse,
    CourseStatsResponse,
    CourseStatus,
    CourseType,
    CourseUpdateRequest,
)
from lms.domain.schemas.specialization import (
    SpecializationCreateRequest,
    SpecializationResponse,
    SpecializationUpdateRequest,
)
from lms.domain.schemas.tenant import TenantCreateRequest, TenantResponse, TenantStatus

__all__ = [
    "CourseCreateRequest",
    "CourseResponse",
    "CourseStatsResponse",
    "CourseStatus",
    "CourseType",
    "CourseUpdateRequest",
    "SpecializationCreateRequest",
    "SpecializationResponse",
    "SpecializationUpdateRequest",
    "TenantCreateRequest",
    "TenantResponse",
    "TenantStatus",
]
