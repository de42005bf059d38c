"""Domain exceptions. Carry a human-readable message; no HTTP or storage concerns."""


class DomainError(Exception):
    """Root of the domain error hierarchy."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DomainValidationError(DomainError):
    """Input breaks a business rule (e.g. a tenant-owned row created without a tenant)."""


class InvalidTenantError(DomainError):
    """Tenant id is not a positive integer."""
