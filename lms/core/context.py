# lms/core/context.py

import contextvars
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from lms.domain.exceptions import InvalidTenantError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IsolationContext:
    """Tenant scope of the current unit of work. Tenant id is only set while enabled."""

    is_enabled: bool = False
    active_tenant_id: Optional[int] = None

    def __post_init__(self) -> None:
        if self.active_tenant_id is not None and not self.is_enabled:
            raise ValueError("active_tenant_id requires is_enabled=True")


DISABLED = IsolationContext()

correlation_id_ctx = contextvars.ContextVar("correlation_id", default=None)
isolation_ctx: contextvars.ContextVar[IsolationContext] = contextvars.ContextVar(
    "isolation", default=DISABLED
)


def _validate_tenant_id(tenant_id: int) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(tenant_id, bool) or not isinstance(tenant_id, int) or tenant_id <= 0:
        raise InvalidTenantError(f"Tenant id must be a positive integer, got {tenant_id!r}")
    return tenant_id


def enable(tenant_id: int) -> contextvars.Token:
    """Scope the current context to tenant_id. Returns a token for reset()."""
    token = isolation_ctx.set(
        IsolationContext(is_enabled=True, active_tenant_id=_validate_tenant_id(tenant_id))
    )
    logger.debug("tenant_isolation_enabled", extra={"tenant_id": tenant_id})
    return token


def disable() -> contextvars.Token:
    """Turn isolation off for system-level and cross-tenant work."""
    token = isolation_ctx.set(DISABLED)
    logger.debug("tenant_isolation_disabled")
    return token


def reset(token: contextvars.Token) -> None:
    isolation_ctx.reset(token)


def current_isolation() -> IsolationContext:
    return isolation_ctx.get()


def current_tenant_id() -> Optional[int]:
    return isolation_ctx.get().active_tenant_id


def is_active() -> bool:
    return isolation_ctx.get().is_enabled


@contextmanager
def tenant_scope(tenant_id: int) -> Iterator[IsolationContext]:
    """Run a block scoped to tenant_id; the previous scope is restored on exit."""
    token = enable(tenant_id)
    try:
        yield isolation_ctx.get()
    finally:
        reset(token)


@contextmanager
def system_scope() -> Iterator[IsolationContext]:
    """Run a block with isolation disabled; the previous scope is restored on exit."""
    token = disable()
    try:
        yield isolation_ctx.get()
    finally:
        reset(token)
