"""Exceptions raised by pyquest.

Both validation errors subclass the builtin exception a caller would expect
(``TypeError`` for a non-numeric sample, ``ValueError`` for a bad level), so
existing ``except ValueError`` handlers keep working.
"""

__all__ = [
    "QuantileCovError",
    "InvalidSampleError",
    "InvalidLevelError",
]


class QuantileCovError(Exception):
    """Base class for all pyquest errors."""


class InvalidSampleError(QuantileCovError, TypeError):
    """The sample is not a non-empty numeric vector."""


class InvalidLevelError(QuantileCovError, ValueError):
    """A probability level is missing, non-numeric, or outside (0, 1)."""
