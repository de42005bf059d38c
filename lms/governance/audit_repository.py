"""Where audit records go. The database implementation lives in infrastructure."""

from typing import Protocol

from lms.governance.audit_models import AuditRecord


class AuditRepository(Protocol):
    async def save(self, record: AuditRecord) -> None:
        """Append the record; records are never updated or removed."""
        ...
