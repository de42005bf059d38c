"""Domain layer: schemas and exceptions. Pure business types only."""

from lms.domain.exceptions import DomainError, DomainValidationError, InvalidTenantError
from lms.domain.schemas import (
    CourseCreateRequest,
    CourseResponse,
    SpecializationCreateRequest,
    SpecializationResponse,
    TenantCreateRequest,
    TenantResponse,
)

__all__ = [
    "CourseCreateRequest",
    "CourseResponse",
    "DomainError",
    "DomainValidationError",
    "InvalidTenantError",
    "SpecializationCreateRequest",
    "SpecializationResponse",
    "TenantCreateRequest",
    "TenantResponse",
]
