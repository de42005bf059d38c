"""Pydantic schemas for the tenant API. No DB or infrastructure."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class TenantStatus(str, Enum):
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    TRIAL = "TRIAL"
    EXPIRED = "EXPIRED"
    CANCELLED = "CANCELLED"


class TenantCreateRequest(BaseModel):
    tenant_name: str = Field(..., min_length=1, max_length=100)
    logo_url_light: Optional[str] = Field(None, max_length=500)
    logo_url_dark: Optional[str] = Field(None, max_length=500)
    theme: Optional[Dict[str, Any]] = None
    tenant_status: TenantStatus = TenantStatus.ACTIVE


class TenantResponse(BaseModel):
    tenant_id: int
    tenant_name: str
    logo_url_light: Optional[str] = None
    logo_url_dark: Optional[str] = None
    theme: Optional[Dict[str, Any]] = None
    tenant_status: str
    is_active: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
