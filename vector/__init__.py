"""
Fixed-dimension numeric vectors with Euclidean arithmetic.
"""

from .version import __version__
from .vector import Vector
from .errors import (
    VectorError,
    InvalidArgumentError,
    DimensionMismatchError,
    IndexOutOfBoundsError,
    InvalidIndexError,
    UnsupportedOperationError,
    InconsistentDataError,
)

__all__ = [
    "Vector",
    "VectorError",
    "InvalidArgumentError",
    "DimensionMismatchError",
    "IndexOutOfBoundsError",
    "InvalidIndexError",
    "UnsupportedOperationError",
    "InconsistentDataError",
    "__version__",
]
