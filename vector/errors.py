"""
Exceptions raised by vector arithmetic and clustering.

Every error also derives from the closest built-in exception, so callers can
catch either the specific class or e.g. ``ValueError``.
"""


class VectorError(Exception):
    """Base class for all errors raised by this library."""


class InvalidArgumentError(VectorError, ValueError):
    """Malformed input: non-numeric values, bad dimension, empty groups."""


class DimensionMismatchError(VectorError, ValueError):
    """Binary operation between vectors of different dimension."""


class IndexOutOfBoundsError(VectorError, IndexError):
    """Coordinate index outside ``[0, dimension)``."""


class InvalidIndexError(VectorError, TypeError):
    """Coordinate index that is not an integer."""


class UnsupportedOperationError(VectorError, TypeError):
    """Operation that would change a vector's dimension."""


class InconsistentDataError(VectorError, ValueError):
    """Clustering input that is not a collection of equal-dimension vectors."""
