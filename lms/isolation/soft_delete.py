"""Soft-delete interceptor: hide deleted rows from reads, turn deletes into timestamped updates."""

from datetime import datetime

from lms.isolation.operation import DELETE_REWRITES, READ_VERBS, Operation, merged, with_default
from lms.isolation.policy import SoftDeletePolicy


def apply_soft_delete(operation: Operation, policy: SoftDeletePolicy, now: datetime) -> Operation:
    """
    Rewrite one operation for soft-delete semantics. Pure: returns the input object
    itself when nothing applies (excluded model or non-delete write).
    """
    if not policy.applies_to(operation.model):
        return operation

    if operation.verb in READ_VERBS:
        where = with_default(operation.where, policy.deleted_flag_field, False)
        if where is operation.where:
            return operation
        return operation.replace(where=where)

    target = DELETE_REWRITES.get(operation.verb)
    if target is not None:
        data = merged(
            operation.data,
            {policy.deleted_flag_field: True, policy.deleted_at_field: now},
        )
        return operation.replace(verb=target, data=data)

    return operation
