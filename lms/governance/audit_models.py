"""Audit trail entry for a data change in the LMS."""

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class AuditRecord:
    """
    One change to tenant data. actor is the system user id, tenant_id the tenant that
    owns the changed row (None for global rows), timestamp_utc must be timezone-aware.
    """

    actor: int
    tenant_id: Optional[int]
    action: str
    resource_type: str
    resource_id: str
    reason: Optional[str]
    correlation_id: Optional[str]
    metadata: Optional[Dict[str, Any]]
    timestamp_utc: datetime

    def __post_init__(self) -> None:
        if not self.action or not self.resource_type:
            raise ValueError("Audit record needs an action and a resource_type")
        if self.timestamp_utc.tzinfo is None:
            raise ValueError("Audit timestamp must be timezone-aware")

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready form for structured logs."""
        out = asdict(self)
        out["timestamp_utc"] = self.timestamp_utc.isoformat()
        return out
