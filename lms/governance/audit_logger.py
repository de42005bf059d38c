"""Immutable audit logging for tenant data changes. No FastAPI."""

from datetime import datetime, timezone
from typing import Optional

from lms.core.context import correlation_id_ctx
from lms.governance.audit_models import AuditRecord
from lms.governance.audit_repository import AuditRepository


class AuditLogger:
    """
    Writes immutable audit records via repository.
    Must include: who, what, when (UTC), why, correlation_id.
    """

    def __init__(self, repository: AuditRepository) -> None:
        self._repository = repository

    async def log_action(
        self,
        *,
        actor: int,
        tenant_id: Optional[int],
        action: str,
        resource_type: str,
        resource_id: str,
        reason: Optional[str] = None,
        correlation_id: Optional[str] = None,
        metadata: Optional[dict] = None,
    ) -> None:
        """Write immutable audit record. Timestamp is UTC; correlation id defaults to the request's."""
        record = AuditRecord(
            actor=actor,
            tenant_id=tenant_id,
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            reason=reason,
            correlation_id=correlation_id or correlation_id_ctx.get(),
            metadata=metadata,
            timestamp_utc=datetime.now(timezone.utc),
        )
        await self._repository.save(record)
