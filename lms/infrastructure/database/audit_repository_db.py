"""DB-backed audit repository. Persists audit records to the system_logs table."""

from lms.governance.audit_models import AuditRecord
from lms.infrastructure.database.client import IsolatedDatabase

AUDIT_MODEL = "SystemLog"


class DbAuditRepository:
    """Implements AuditRepository. SystemLog is excluded from soft-delete and exempt from tenant scoping."""

    def __init__(self, db: IsolatedDatabase) -> None:
        self._db = db

    async def save(self, record: AuditRecord) -> None:
        await self._db.model(AUDIT_MODEL).create(
            data={
                "tenant_id": record.tenant_id,
                "actor": str(record.actor),
                "action": record.action,
                "resource_type": record.resource_type,
                "resource_id": record.resource_id,
                "reason": record.reason,
                "correlation_id": record.correlation_id,
                "metadata_": record.metadata,
                "created_at": record.timestamp_utc,
            }
        )
