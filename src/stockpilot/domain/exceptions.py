"""Domain-level exceptions.

All failures are expressed as subclasses of DomainException so the CLI
layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class NotAuthenticatedError(DomainException):
    """The operation needs an accepted, signed-in principal."""


class DocumentStoreError(DomainException):
    """The backing document store rejected or failed an operation."""


class DocumentNotFoundError(DocumentStoreError):
    """A write targeted a document that does not exist."""


class IdentityProviderError(DomainException):
    """Sign-in or sign-out against the identity provider failed."""


class RecommendationError(DomainException):
    """The restock recommendation service could not produce a result."""
