"""Domain-level exceptions.

All failures are expressed as subclasses of DomainException so the CLI
layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A value or identifier was rejected before reaching the store."""


class UnknownResourceError(ValidationError):
    """A resource identifier does not address anything this system serves."""


class EntityNotFoundError(DomainException):
    """A requested product does not exist."""


class PersistenceError(DomainException):
    """The record store failed internally; nothing was written."""


class SessionClosedError(DomainException):
    """An editor session was used after it was saved, deleted or discarded."""
