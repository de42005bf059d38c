"""CourseService: specialization reference check and scoped statistics."""

import pytest

from lms.application.exceptions import NotFoundError


async def test_create_requires_specialization_in_same_tenant(
    course_service, specialization_service, admin_1, admin_2, tenants
):
    other = await specialization_service.create(admin_2, {"specialization_name": "History"})
    with pytest.raises(NotFoundError):
        await course_service.create(
            admin_1, {"course_name": "Intro", "specialization_id": other.specialization_id}
        )

    own = await specialization_service.create(admin_1, {"specialization_name": "Math"})
    course = await course_service.create(
        admin_1, {"course_name": "Algebra", "specialization_id": own.specialization_id}
    )
    assert course.tenant_id == 1
    assert course.course_status == "DRAFT"


async def test_deleted_specialization_cannot_be_referenced(
    course_service, specialization_service, admin_1, tenants
):
    spec = await specialization_service.create(admin_1, {"specialization_name": "Math"})
    await specialization_service.delete(admin_1, spec.specialization_id)
    with pytest.raises(NotFoundError):
        await course_service.create(
            admin_1, {"course_name": "Algebra", "specialization_id": spec.specialization_id}
        )


async def test_stats_only_count_visible_courses(course_service, admin_1, admin_2, tenants):
    a = await course_service.create(admin_1, {"course_name": "A", "course_price": 10.0})
    await course_service.create(admin_1, {"course_name": "B", "course_price": 30.0, "course_status": "PUBLISHED"})
    await course_service.create(admin_1, {"course_name": "C", "course_price": 50.0, "course_status": "PUBLISHED"})
    await course_service.create(admin_2, {"course_name": "Z", "course_price": 1000.0})
    await course_service.delete(admin_1, a.course_id)

    stats = await course_service.stats(admin_1)
    assert stats["total"] == 2
    assert stats["by_status"] == {"PUBLISHED": 2}
    assert stats["price_sum"] == pytest.approx(80.0)
    assert stats["price_avg"] == pytest.approx(40.0)


async def test_stats_for_empty_tenant(course_service, admin_2, tenants):
    stats = await course_service.stats(admin_2)
    assert stats == {"total": 0, "by_status": {}, "price_sum": None, "price_avg": None}


async def test_super_admin_cannot_link_course_to_other_tenant_specialization(
    course_service, specialization_service, admin_1, admin_2, super_admin, tenants
):
    foreign = await specialization_service.create(admin_1, {"specialization_name": "Math"})
    own = await specialization_service.create(admin_2, {"specialization_name": "History"})
    course = await course_service.create(admin_2, {"course_name": "Rome"})

    with pytest.raises(NotFoundError):
        await course_service.update(
            super_admin, course.course_id, {"specialization_id": foreign.specialization_id}
        )
    linked = await course_service.update(
        super_admin, course.course_id, {"specialization_id": own.specialization_id}
    )
    assert linked.specialization_id == own.specialization_id
    assert linked.tenant_id == 2
