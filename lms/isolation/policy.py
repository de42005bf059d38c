"""Static isolation policies: which models bypass soft-delete or tenant scoping, and field names."""

from dataclasses import dataclass
from typing import FrozenSet

from lms.config.settings import AppSettings

DEFAULT_SOFT_DELETE_EXCLUDED: FrozenSet[str] = frozenset({"SystemLog", "Migration", "AuditLog"})

DEFAULT_TENANT_EXEMPT: FrozenSet[str] = frozenset(
    {
        "SystemUser",
        "Client",
        "SystemLog",
        "Migration",
        "AuditLog",
        "Country",
        "State",
        "City",
    }
)


@dataclass(frozen=True)
class SoftDeletePolicy:
    excluded_models: FrozenSet[str] = DEFAULT_SOFT_DELETE_EXCLUDED
    deleted_flag_field: str = "is_deleted"
    deleted_at_field: str = "deleted_at"

    def applies_to(self, model: str) -> bool:
        return model not in self.excluded_models

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "SoftDeletePolicy":
        return cls(
            excluded_models=frozenset(settings.soft_delete_excluded_models),
            deleted_flag_field=settings.deleted_flag_field,
            deleted_at_field=settings.deleted_at_field,
        )


@dataclass(frozen=True)
class TenantScopingPolicy:
    tenant_field: str = "tenant_id"
    exempt_models: FrozenSet[str] = DEFAULT_TENANT_EXEMPT

    def applies_to(self, model: str) -> bool:
        return model not in self.exempt_models

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "TenantScopingPolicy":
        return cls(
            tenant_field=settings.tenant_field,
            exempt_models=frozenset(settings.tenant_exempt_models),
        )
