"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Malformed input or a violated value invariant."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ConflictError(DomainException):
    """The operation conflicts with the current state of an aggregate."""


class ConcurrentModificationError(ConflictError):
    """The aggregate was changed by someone else since it was loaded."""


class EmptyCartError(DomainException):
    """Checkout was attempted on a cart without lines."""


class StorageError(DomainException):
    """The persistent store could not be read or written."""
