"""Specializations API router. Tenant scoping and soft-delete are applied below the service."""

from typing import Annotated, List

from fastapi import APIRouter, Depends, Query, Response

from lms.api.dependencies import get_specialization_service, require
from lms.application.specialization_service import SpecializationService
from lms.domain.schemas.specialization import (
    SpecializationCreateRequest,
    SpecializationResponse,
    SpecializationUpdateRequest,
)
from lms.security.principal import Principal

router = APIRouter()


def _payload(body, principal: Principal) -> dict:
    data = body.model_dump(mode="json", exclude_none=True)
    # only a cross-tenant caller may name the owning tenant
    if not principal.is_cross_tenant:
        data.pop("tenant_id", None)
    return data


@router.get("/", response_model=List[SpecializationResponse])
async def list_specializations(
    principal: Annotated[Principal, Depends(require("view"))],
    service: Annotated[SpecializationService, Depends(get_specialization_service)],
    skip: int = Query(0, ge=0),
    take: int = Query(50, ge=1, le=200),
):
    return await service.list(principal, skip=skip, take=take)


@router.get("/deleted", response_model=List[SpecializationResponse])
async def list_deleted_specializations(
    principal: Annotated[Principal, Depends(require("delete"))],
    service: Annotated[SpecializationService, Depends(get_specialization_service)],
):
    return await service.list_deleted(principal)


@router.get("/{specialization_id}", response_model=SpecializationResponse)
async def get_specialization(
    specialization_id: int,
    principal: Annotated[Principal, Depends(require("view"))],
    service: Annotated[SpecializationService, Depends(get_specialization_service)],
):
    return await service.get(principal, specialization_id)


@router.post("/", response_model=SpecializationResponse, status_code=201)
async def create_specialization(
    body: SpecializationCreateRequest,
    principal: Annotated[Principal, Depends(require("create"))],
    service: Annotated[SpecializationService, Depends(get_specialization_service)],
):
    return await service.create(principal, _payload(body, principal))


@router.patch("/{specialization_id}", response_model=SpecializationResponse)
async def update_specialization(
    specialization_id: int,
    body: SpecializationUpdateRequest,
    principal: Annotated[Principal, Depends(require("update"))],
    service: Annotated[SpecializationService, Depends(get_specialization_service)],
):
    return await service.update(principal, specialization_id, _payload(body, principal))


@router.delete("/{specialization_id}", status_code=204)
async def delete_specialization(
    specialization_id: int,
    principal: Annotated[Principal, Depends(require("delete"))],
    service: Annotated[SpecializationService, Depends(get_specialization_service)],
):
    await service.delete(principal, specialization_id)
    return Response(status_code=204)


@router.post("/{specialization_id}/restore", response_model=SpecializationResponse)
async def restore_specialization(
    specialization_id: int,
    principal: Annotated[Principal, Depends(require("delete"))],
    service: Annotated[SpecializationService, Depends(get_specialization_service)],
):
    return await service.restore(principal, specialization_id)
