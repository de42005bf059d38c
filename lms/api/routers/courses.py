"""Courses API router."""

from typing import Annotated, List

from fastapi import APIRouter, Depends, Query, Response

from lms.api.dependencies import get_course_service, require
from lms.application.course_service import CourseService
from lms.domain.schemas.course import (
    CourseCreateRequest,
    CourseResponse,
    CourseStatsResponse,
    CourseUpdateRequest,
)
from lms.security.principal import Principal

router = APIRouter()


@router.get("/", response_model=List[CourseResponse])
async def list_courses(
    principal: Annotated[Principal, Depends(require("view"))],
    service: Annotated[CourseService, Depends(get_course_service)],
    skip: int = Query(0, ge=0),
    take: int = Query(50, ge=1, le=200),
):
    return await service.list(principal, skip=skip, take=take)


@router.get("/stats", response_model=CourseStatsResponse)
async def course_stats(
    principal: Annotated[Principal, Depends(require("view"))],
    service: Annotated[CourseService, Depends(get_course_service)],
):
    return await service.stats(principal)


@router.get("/{course_id}", response_model=CourseResponse)
async def get_course(
    course_id: int,
    principal: Annotated[Principal, Depends(require("view"))],
    service: Annotated[CourseService, Depends(get_course_service)],
):
    return await service.get(principal, course_id)


@router.post("/", response_model=CourseResponse, status_code=201)
async def create_course(
    body: CourseCreateRequest,
    principal: Annotated[Principal, Depends(require("create"))],
    service: Annotated[CourseService, Depends(get_course_service)],
):
    data = body.model_dump(mode="json", exclude_none=True)
    if not principal.is_cross_tenant:
        data.pop("tenant_id", None)
    return await service.create(principal, data)


@router.patch("/{course_id}", response_model=CourseResponse)
async def update_course(
    course_id: int,
    body: CourseUpdateRequest,
    principal: Annotated[Principal, Depends(require("update"))],
    service: Annotated[CourseService, Depends(get_course_service)],
):
    return await service.update(principal, course_id, body.model_dump(mode="json", exclude_none=True))


@router.delete("/{course_id}", status_code=204)
async def delete_course(
    course_id: int,
    principal: Annotated[Principal, Depends(require("delete"))],
    service: Annotated[CourseService, Depends(get_course_service)],
):
    await service.delete(principal, course_id)
    return Response(status_code=204)
