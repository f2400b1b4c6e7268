"""Custom exceptions for the entropies module."""


class EntropiesError(Exception):
    """Base exception for entropies-related errors."""

    pass


class UnboundedAlphabetError(EntropiesError, ValueError):
    """Raised when the number of possible outcomes of an estimator is not statically known."""

    pass


class IncompatibleInputError(EntropiesError, TypeError):
    """Raised when an estimator receives a scalar series where it needs vectors, or vice versa."""

    pass
