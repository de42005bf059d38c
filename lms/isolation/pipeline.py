"""Isolation pipeline: soft-delete, then tenant scoping, with an explicit rewrite-failure policy."""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from lms.core.context import IsolationContext, current_isolation
from lms.isolation.operation import Operation
from lms.isolation.policy import SoftDeletePolicy, TenantScopingPolicy
from lms.isolation.soft_delete import apply_soft_delete
from lms.isolation.tenant_scope import apply_tenant_scope
from lms.observability.metrics import MetricsCollector
from lms.security.exceptions import IsolationRewriteError

SOFT_DELETE = "soft_delete"
TENANT_SCOPE = "tenant_scope"


class IsolationFailureMode(str, Enum):
    """What to do when an interceptor raises while rewriting."""

    FAIL_CLOSED = "fail_closed"  # reject the operation
    FAIL_OPEN = "fail_open"  # log, forward the unmodified operation


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IsolationPipeline:
    """
    Runs every operation through the soft-delete interceptor and then the tenant
    scoping interceptor. Order is fixed: a delete must already be an update when
    tenant scoping sees it, so the tenant predicate lands on `where`.
    Downstream dispatch failures are not this layer's concern and are never caught here.
    """

    def __init__(
        self,
        soft_delete_policy: SoftDeletePolicy,
        tenant_policy: TenantScopingPolicy,
        *,
        failure_mode: IsolationFailureMode = IsolationFailureMode.FAIL_CLOSED,
        metrics: Optional[MetricsCollector] = None,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._soft_delete_policy = soft_delete_policy
        self._tenant_policy = tenant_policy
        self._failure_mode = IsolationFailureMode(failure_mode)
        self._metrics = metrics or MetricsCollector()
        self._logger = logger or logging.getLogger(__name__)
        self._clock = clock

    @property
    def failure_mode(self) -> IsolationFailureMode:
        return self._failure_mode

    @property
    def metrics(self) -> MetricsCollector:
        return self._metrics

    def rewrite(self, operation: Operation, context: Optional[IsolationContext] = None) -> Operation:
        """Return the operation to dispatch. context defaults to the ambient isolation context."""
        if context is None:
            context = current_isolation()

        operation = self._guarded(
            SOFT_DELETE,
            operation,
            lambda op: apply_soft_delete(op, self._soft_delete_policy, self._clock()),
            context,
        )
        return self._guarded(
            TENANT_SCOPE,
            operation,
            lambda op: apply_tenant_scope(op, context, self._tenant_policy),
            context,
        )

    def _guarded(
        self,
        interceptor: str,
        operation: Operation,
        rewrite: Callable[[Operation], Operation],
        context: IsolationContext,
    ) -> Operation:
        try:
            rewritten = rewrite(operation)
        except Exception as e:
            self._metrics.increment("isolation_rewrite_failures", category=interceptor)
            self._logger.error(
                "isolation_rewrite_failed",
                extra={
                    "interceptor": interceptor,
                    "model": operation.model,
                    "verb": operation.verb.value,
                    "tenant_id": context.active_tenant_id,
                    "failure_mode": self._failure_mode.value,
                    "error": str(e),
                },
            )
            if self._failure_mode is IsolationFailureMode.FAIL_OPEN:
                return operation
            raise IsolationRewriteError(
                f"{interceptor} could not rewrite {operation.verb.value} on {operation.model}: {e}",
                interceptor=interceptor,
                model=operation.model,
            ) from e

        if rewritten is not operation:
            self._metrics.increment("isolation_rewrites", category=interceptor)
            self._logger.debug(
                "isolation_rewrite_applied",
                extra={
                    "interceptor": interceptor,
                    "model": operation.model,
                    "verb": operation.verb.value,
                    "rewritten_verb": rewritten.verb.value,
                    "tenant_id": context.active_tenant_id,
                },
            )
        return rewritten
