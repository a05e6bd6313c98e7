"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A request was malformed or a business invariant was violated."""


class InvalidQuantityError(ValidationError):
    """An adjustment quantity was not a positive, finite number."""


class NotFoundError(DomainException):
    """A requested stock item does not exist or has been deactivated."""


class InsufficientStockError(DomainException):
    """A removal would drive the on-hand quantity below zero."""

    def __init__(self, item_name: str, requested, available) -> None:
        self.item_name = item_name
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for {item_name} "
            f"(need {requested}, have {available} on hand)"
        )


class ConcurrencyConflictError(DomainException):
    """An adjustment could not be serialized against concurrent writers."""


class PersistenceError(DomainException):
    """The storage layer failed part-way through a write."""
