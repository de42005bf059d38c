"""Tenant scoping interceptor: pin reads and writes to the active tenant."""

from lms.core.context import IsolationContext
from lms.isolation.operation import (
    CREATE_VERBS,
    FILTERED_WRITE_VERBS,
    READ_VERBS,
    Operation,
    with_default,
)
from lms.isolation.policy import TenantScopingPolicy


def apply_tenant_scope(
    operation: Operation,
    context: IsolationContext,
    policy: TenantScopingPolicy,
) -> Operation:
    """
    Add tenant_id = active tenant to the predicate of reads, updates and deletes,
    and to the payload of creates. A caller-supplied top-level tenant_id wins.
    Must run after the soft-delete interceptor so rewritten deletes are filtered on `where`.
    """
    tenant_id = context.active_tenant_id
    if not context.is_enabled or tenant_id is None or not policy.applies_to(operation.model):
        return operation

    if operation.verb in READ_VERBS or operation.verb in FILTERED_WRITE_VERBS:
        where = with_default(operation.where, policy.tenant_field, tenant_id)
        if where is operation.where:
            return operation
        return operation.replace(where=where)

    if operation.verb in CREATE_VERBS:
        data = with_default(operation.data, policy.tenant_field, tenant_id)
        if data is operation.data:
            return operation
        return operation.replace(data=data)

    return operation
