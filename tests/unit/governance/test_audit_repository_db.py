"""DB audit repository: records land in system_logs regardless of tenant scope."""

from datetime import datetime, timezone

from lms.core.context import system_scope, tenant_scope
from lms.governance.audit_models import AuditRecord
from lms.infrastructure.database.audit_repository_db import DbAuditRepository


async def test_save_persists_record_outside_tenant_filter(db, tenants):
    record = AuditRecord(
        actor=4,
        tenant_id=2,
        action="delete",
        resource_type="course",
        resource_id="9",
        reason=None,
        correlation_id="corr-9",
        metadata={"source": "test"},
        timestamp_utc=datetime(2024, 5, 1, tzinfo=timezone.utc),
    )
    with tenant_scope(1):
        await DbAuditRepository(db).save(record)
        # SystemLog is exempt: tenant 1 does not get its own tenant stamped or filtered
        logs = await db.model("SystemLog").find_many()
    assert len(logs) == 1
    assert logs[0].tenant_id == 2
    assert logs[0].actor == "4"
    assert logs[0].metadata_ == {"source": "test"}
    with system_scope():
        assert await db.model("SystemLog").count() == 1
