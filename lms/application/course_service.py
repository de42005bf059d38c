"""Courses: tenant-scoped, optionally linked to a specialization of the same tenant."""

from typing import Any, Dict, Mapping

from lms.application.entity_service import EntityService
from lms.application.exceptions import NotFoundError
from lms.security.principal import Principal, principal_scope


class CourseService(EntityService):
    model = "Course"
    primary_key = "course_id"
    resource_type = "course"

    async def _validate_create(self, data: Mapping[str, Any]) -> None:
        await self._ensure_specialization(data.get("specialization_id"), data.get("tenant_id"))

    async def _validate_update(self, entity: Any, data: Mapping[str, Any]) -> None:
        # the specialization must belong to the course's tenant, not the caller's scope
        if data.get("specialization_id") is not None:
            await self._ensure_specialization(data["specialization_id"], entity.tenant_id)

    async def _ensure_specialization(self, specialization_id, tenant_id=None) -> None:
        """Another tenant's specialization is invisible here, so it reads as missing."""
        if specialization_id is None:
            return
        where: dict = {"specialization_id": specialization_id}
        if tenant_id is not None:
            where["tenant_id"] = tenant_id
        if await self._db.model("Specialization").find_first(where=where) is None:
            raise NotFoundError("Specialization not found")

    async def stats(self, principal: Principal) -> Dict[str, Any]:
        """Course counts per status plus price totals, over the caller's visible courses."""
        with principal_scope(principal):
            by_status = await self.repo.group_by(by=["course_status"])
            totals = await self.repo.aggregate(count=True, sum=["course_price"], avg=["course_price"])
        return {
            "total": totals["count"],
            "by_status": {row["course_status"]: row["count"] for row in by_status},
            "price_sum": totals["sum"]["course_price"],
            "price_avg": totals["avg"]["course_price"],
        }
