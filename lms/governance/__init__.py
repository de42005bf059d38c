"""Governance: audit logging. No FastAPI."""

from lms.governance.audit_logger import AuditLogger
from lms.governance.audit_models import AuditRecord
from lms.governance.audit_repository import AuditRepository

__all__ = [
    "AuditLogger",
    "AuditRecord",
    "AuditRepository",
]
