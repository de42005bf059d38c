"""
Chaos: malformed operations and failing storage.
Fail-closed: a rewrite failure never reaches the database and never widens a query.
Fail-open: the operation goes through unmodified and the failure is counted.
Dispatch failures are propagated untouched; the isolation layer does not swallow them.
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from lms.core.context import tenant_scope
from lms.infrastructure.database.client import IsolatedDatabase
from lms.isolation.operation import Operation, Verb
from lms.isolation.pipeline import IsolationFailureMode, IsolationPipeline
from lms.isolation.policy import SoftDeletePolicy, TenantScopingPolicy
from lms.security.exceptions import IsolationRewriteError


class ExplodingPolicy(TenantScopingPolicy):
    """Tenant policy whose lookup fails, simulating a broken configuration source."""

    def applies_to(self, model: str) -> bool:
        raise RuntimeError("policy store unavailable")


async def test_fail_closed_blocks_dispatch(db, tenants, metrics):
    malformed = Operation(model="Specialization", verb=Verb.FIND_MANY, where=[("tenant_id", 2)])
    with tenant_scope(1):
        with pytest.raises(IsolationRewriteError):
            await db.execute(malformed)
    assert metrics.get("isolation_rewrite_failures", category="soft_delete") == 1


async def test_fail_closed_on_broken_policy_never_returns_other_tenants(session, tenants, metrics):
    pipeline = IsolationPipeline(SoftDeletePolicy(), ExplodingPolicy(), metrics=metrics)
    db = IsolatedDatabase(session, pipeline)
    with pytest.raises(IsolationRewriteError) as exc_info:
        with tenant_scope(1):
            await db.model("Specialization").find_many()
    assert exc_info.value.interceptor == "tenant_scope"
    assert metrics.get("isolation_rewrite_failures", category="tenant_scope") == 1


async def test_fail_open_forwards_unscoped_operation(session, tenants, metrics):
    pipeline = IsolationPipeline(
        SoftDeletePolicy(),
        ExplodingPolicy(),
        failure_mode=IsolationFailureMode.FAIL_OPEN,
        metrics=metrics,
    )
    db = IsolatedDatabase(session, pipeline)
    with tenant_scope(2):
        await db.model("Specialization").create(data={"specialization_name": "x", "tenant_id": 2})
        rows = await db.model("Specialization").find_many()
    assert len(rows) == 1
    assert metrics.get("isolation_rewrite_failures", category="tenant_scope") == 2


async def test_downstream_failure_propagates_unchanged(pipeline):
    session = AsyncMock()
    session.execute = AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("db down")))
    db = IsolatedDatabase(session, pipeline)
    with tenant_scope(1):
        with pytest.raises(OperationalError):
            await db.model("Course").count()
