"""Pydantic schemas for the course API."""

from datetime import datetime
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, Field


class CourseStatus(str, Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"
    SUSPENDED = "SUSPENDED"


class CourseType(str, Enum):
    FREE = "FREE"
    PAID = "PAID"


class CourseCreateRequest(BaseModel):
    course_name: str = Field(..., min_length=1, max_length=255)
    course_description: Optional[str] = None
    course_status: CourseStatus = CourseStatus.DRAFT
    course_type: CourseType = CourseType.PAID
    course_price: Optional[float] = Field(None, ge=0)
    specialization_id: Optional[int] = Field(None, gt=0)
    tenant_id: Optional[int] = Field(None, gt=0)


class CourseUpdateRequest(BaseModel):
    course_name: Optional[str] = Field(None, min_length=1, max_length=255)
    course_description: Optional[str] = None
    course_status: Optional[CourseStatus] = None
    course_type: Optional[CourseType] = None
    course_price: Optional[float] = Field(None, ge=0)
    specialization_id: Optional[int] = Field(None, gt=0)


class CourseResponse(BaseModel):
    course_id: int
    tenant_id: int
    course_name: str
    course_description: Optional[str] = None
    course_status: str
    course_type: str
    course_price: Optional[float] = None
    specialization_id: Optional[int] = None
    is_active: bool
    is_deleted: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class CourseStatsResponse(BaseModel):
    total: int
    by_status: Dict[str, int]
    price_sum: Optional[float] = None
    price_avg: Optional[float] = None
