"""Security-layer exceptions. Typed, no HTTP."""


class SecurityError(Exception):
    """Base for all security-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AuthenticationError(SecurityError):
    """Raised when the request carries no usable principal."""


class AuthorizationError(SecurityError):
    """Raised when role does not have permission for the action."""


class TenantIsolationError(SecurityError):
    """Raised when resource tenant does not match request tenant (cross-tenant access)."""


class IsolationRewriteError(SecurityError):
    """Raised when an interceptor cannot rewrite an operation and the pipeline fails closed."""

    def __init__(self, message: str, *, interceptor: str, model: str) -> None:
        self.interceptor = interceptor
        self.model = model
        super().__init__(message)
