"""Application-layer exceptions. Do not reuse domain exceptions."""


class ApplicationError(Exception):
    """Base for all application-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(ApplicationError):
    """Raised when an entity does not exist, is soft-deleted, or belongs to another tenant."""


class ConflictError(ApplicationError):
    """Raised when a uniqueness rule would be violated."""
