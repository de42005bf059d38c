"""Pydantic schemas for the specialization API."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class SpecializationCreateRequest(BaseModel):
    """tenant_id is only honoured for a super admin working without a tenant header."""

    specialization_name: str = Field(..., min_length=1, max_length=255)
    specialization_thumbnail_url: Optional[str] = None
    tenant_id: Optional[int] = Field(None, gt=0)

    @field_validator("specialization_name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("specialization_name must not be blank")
        return v.strip()


class SpecializationUpdateRequest(BaseModel):
    specialization_name: Optional[str] = Field(None, min_length=1, max_length=255)
    specialization_thumbnail_url: Optional[str] = None
    is_active: Optional[bool] = None


class SpecializationResponse(BaseModel):
    specialization_id: int
    tenant_id: int
    specialization_name: str
    specialization_thumbnail_url: Optional[str] = None
    is_active: bool
    is_deleted: bool
    created_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
