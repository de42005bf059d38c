"""IsolatedDatabase end to end: rewritten operations against SQLite."""

import pytest

from lms.core.context import system_scope, tenant_scope
from lms.infrastructure.database.exceptions import RecordNotFoundError


async def _seed(db):
    for tenant_id, name in [(1, "Math"), (1, "Physics"), (2, "History")]:
        with tenant_scope(tenant_id):
            await db.model("Specialization").create(data={"specialization_name": name})


async def test_create_is_stamped_with_active_tenant(db, tenants):
    with tenant_scope(2):
        row = await db.model("Specialization").create(data={"specialization_name": "Art"})
    assert row.tenant_id == 2
    assert row.is_deleted is False


async def test_reads_are_tenant_scoped(db, tenants):
    await _seed(db)
    specs = db.model("Specialization")
    with tenant_scope(1):
        names = [s.specialization_name for s in await specs.find_many(order_by={"specialization_name": "asc"})]
        assert names == ["Math", "Physics"]
        assert await specs.count() == 2
        assert await specs.find_first(where={"specialization_name": "History"}) is None
    with system_scope():
        assert await specs.count() == 3


async def test_delete_is_soft_and_hidden_from_reads(db, tenants, fixed_now):
    await _seed(db)
    specs = db.model("Specialization")
    with tenant_scope(1):
        math = await specs.find_first(where={"specialization_name": "Math"})
        deleted = await specs.delete(where={"specialization_id": math.specialization_id}, data={"deleted_by": 5})
        assert deleted.is_deleted is True
        assert deleted.deleted_by == 5
        assert deleted.deleted_at is not None
        assert await specs.count() == 1
        hidden = await specs.find_many(where={"is_deleted": True})
        assert [s.specialization_name for s in hidden] == ["Math"]
    with system_scope():
        # the row still exists, only flagged
        assert len(await specs.find_many(where={"is_deleted": True})) == 1


async def test_cross_tenant_delete_matches_nothing(db, tenants):
    await _seed(db)
    specs = db.model("Specialization")
    with system_scope():
        history = await specs.find_first(where={"specialization_name": "History"})
    with tenant_scope(1):
        with pytest.raises(RecordNotFoundError):
            await specs.delete(where={"specialization_id": history.specialization_id})
    with tenant_scope(2):
        assert await specs.count() == 1


async def test_delete_many_scoped_to_tenant(db, tenants):
    await _seed(db)
    specs = db.model("Specialization")
    with tenant_scope(1):
        assert await specs.delete_many() == {"count": 2}
        assert await specs.count() == 0
    with tenant_scope(2):
        assert await specs.count() == 1


async def test_group_by_and_aggregate_are_scoped(db, tenants):
    courses = db.model("Course")
    with tenant_scope(1):
        await courses.create(data={"course_name": "A", "course_price": 10})
        await courses.create(data={"course_name": "B", "course_price": 30, "course_status": "PUBLISHED"})
    with tenant_scope(2):
        await courses.create(data={"course_name": "C", "course_price": 100})
    with tenant_scope(1):
        groups = await courses.group_by(by=["course_status"])
        totals = await courses.aggregate(count=True, sum=["course_price"])
    assert groups == [{"course_status": "DRAFT", "count": 1}, {"course_status": "PUBLISHED", "count": 1}]
    assert totals["count"] == 2
    assert totals["sum"]["course_price"] == pytest.approx(40.0)


async def test_exempt_model_is_global(db, tenants):
    countries = db.model("Country")
    with system_scope():
        await countries.create(data={"name": "India", "iso_code_2": "IN"})
    with tenant_scope(1):
        assert await countries.count() == 1
