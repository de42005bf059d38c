"""Data-access isolation: soft-delete and tenant scoping interceptors over typed operations."""

from lms.isolation.operation import Operation, Verb
from lms.isolation.pipeline import IsolationFailureMode, IsolationPipeline
from lms.isolation.policy import SoftDeletePolicy, TenantScopingPolicy
from lms.isolation.soft_delete import apply_soft_delete
from lms.isolation.tenant_scope import apply_tenant_scope

__all__ = [
    "IsolationFailureMode",
    "IsolationPipeline",
    "Operation",
    "SoftDeletePolicy",
    "TenantScopingPolicy",
    "Verb",
    "apply_soft_delete",
    "apply_tenant_scope",
]
