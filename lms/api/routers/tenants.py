"""Tenants API router: list and read follow the caller's scope; create/delete need manage_tenants."""

from typing import Annotated, List

from fastapi import APIRouter, Depends, Query, Response

from lms.api.dependencies import get_tenant_service, require
from lms.application.tenant_service import TenantService
from lms.domain.schemas.tenant import TenantCreateRequest, TenantResponse
from lms.security.principal import Principal

router = APIRouter()


@router.get("/", response_model=List[TenantResponse])
async def list_tenants(
    principal: Annotated[Principal, Depends(require("view"))],
    service: Annotated[TenantService, Depends(get_tenant_service)],
    skip: int = Query(0, ge=0),
    take: int = Query(50, ge=1, le=200),
):
    return await service.list(principal, skip=skip, take=take)


@router.get("/{tenant_id}", response_model=TenantResponse)
async def get_tenant(
    tenant_id: int,
    principal: Annotated[Principal, Depends(require("view"))],
    service: Annotated[TenantService, Depends(get_tenant_service)],
):
    return await service.get(principal, tenant_id)


@router.post("/", response_model=TenantResponse, status_code=201)
async def create_tenant(
    body: TenantCreateRequest,
    principal: Annotated[Principal, Depends(require("manage_tenants"))],
    service: Annotated[TenantService, Depends(get_tenant_service)],
):
    return await service.create(principal, body.model_dump(mode="json"))


@router.delete("/{tenant_id}", status_code=204)
async def delete_tenant(
    tenant_id: int,
    principal: Annotated[Principal, Depends(require("manage_tenants"))],
    service: Annotated[TenantService, Depends(get_tenant_service)],
):
    await service.delete(principal, tenant_id)
    return Response(status_code=204)
