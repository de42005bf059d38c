"""Query dispatch exceptions. Raised by the dispatcher, never by the interceptors."""


class DatabaseError(Exception):
    """Base for all dispatch-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnknownModelError(DatabaseError):
    """Raised when an operation names a model that is not mapped."""


class UnknownFieldError(DatabaseError):
    """Raised when a predicate, payload or option references a column the model does not have."""


class InvalidPredicateError(DatabaseError):
    """Raised when a predicate uses an unsupported operator or shape."""


class RecordNotFoundError(DatabaseError):
    """Raised when update/delete of a single record matches nothing."""
