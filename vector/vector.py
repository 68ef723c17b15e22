"""
Fixed-dimension numeric vectors.

A :class:`Vector` holds its coordinates in a NumPy ``float64`` array whose
length is fixed when the vector is created. All binary operations require
both operands to have the same dimension.
"""

from __future__ import annotations
import math
import numbers
from collections.abc import Iterable, Mapping
from typing import Callable, Iterator, List, Sequence, Tuple, Union

import numpy as np

from .errors import (
    DimensionMismatchError,
    IndexOutOfBoundsError,
    InvalidArgumentError,
    InvalidIndexError,
    UnsupportedOperationError,
)

# Accepted coordinate input. Strings must parse as a finite decimal or
# exponent literal; digit separators ("1_000") are rejected.
Numeric = Union[int, float, str, np.integer, np.floating]

# Error messages
UNKNOWN_SIZE = "Can not initialize a vector without a dimension or values"
INVALID_DIMENSION = "Dimension must be a positive integer, got {!r}"
INVALID_DATA = "Data is not a non-empty sequence of finite numbers"
INVALID_VALUE = "Value {!r} is not a finite number"
INVALID_INDEX = "Index {!r} not valid"
OUT_OF_BOUNDS = "Index {} out of bounds for dimension {}"
INVALID_OPERATION = "Trying to do an operation on vectors of dimension {} and {}"
CANNOT_DELETE = "You can not delete a vector's coordinate"
EMPTY_GROUP = "Expected a non-empty sequence of vectors"
NOT_A_VECTOR = "Expected a Vector, got {!r}"


def _is_integer(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, (bool, np.bool_))


def _to_real(value) -> float:
    """Coerce an int, float, NumPy scalar or numeric string to a finite float."""
    if isinstance(value, (bool, np.bool_)):
        raise InvalidArgumentError(INVALID_VALUE.format(value))
    if isinstance(value, str):
        # float() also takes digit separators such as "1_000"; plain notation only.
        if "_" in value:
            raise InvalidArgumentError(INVALID_VALUE.format(value))
        try:
            number = float(value)
        except ValueError:
            raise InvalidArgumentError(INVALID_VALUE.format(value)) from None
    elif isinstance(value, numbers.Real):
        try:
            number = float(value)
        except OverflowError:
            raise InvalidArgumentError(INVALID_VALUE.format(value)) from None
    else:
        raise InvalidArgumentError(INVALID_VALUE.format(value))
    if not math.isfinite(number):
        raise InvalidArgumentError(INVALID_VALUE.format(value))
    return number


class Vector(object):
    """A multi-dimensional vector of real coordinates.

    The constructor is flexible, mirroring the ways a vector is usually
    written down:

    .. code-block:: python

        Vector(3)              # zero vector of dimension 3
        Vector([1, 2, 3])      # from a sequence
        Vector(1, "2", 3.5)    # from positional numbers

    Coordinates are read and written with :meth:`get` and :meth:`set` (or the
    ``v[i]`` shorthand). The dimension never changes, so deleting a
    coordinate raises :class:`~vector.errors.UnsupportedOperationError`.

    Raises:
        InvalidArgumentError: If no arguments are given, the dimension is not
            a positive integer, or the values are empty or not all numeric.
    """

    def __init__(self, *args) -> None:
        if not args:
            raise InvalidArgumentError(UNKNOWN_SIZE)
        data = args[0] if len(args) == 1 else args

        if _is_integer(data):
            if data < 1:
                raise InvalidArgumentError(INVALID_DIMENSION.format(data))
            self._data = np.zeros(int(data), dtype=np.float64)
        else:
            if isinstance(data, (str, bytes, Mapping)) or not isinstance(data, Iterable):
                raise InvalidArgumentError(INVALID_DATA)
            try:
                values = list(data)
            except TypeError:
                raise InvalidArgumentError(INVALID_DATA) from None
            if not values:
                raise InvalidArgumentError(INVALID_DATA)
            self._data = np.array([_to_real(v) for v in values], dtype=np.float64)

        self._dimension = self._data.shape[0]

    @classmethod
    def _from_array(cls, array: np.ndarray) -> Vector:
        """Wrap an already validated 1-d float array without copying."""
        vector = cls.__new__(cls)
        vector._data = array
        vector._dimension = array.shape[0]
        return vector

    @property
    def dimension(self) -> int:
        """Number of coordinates, fixed at construction."""
        return self._dimension

    @property
    def coordinates(self) -> Tuple[float, ...]:
        """The coordinates as an immutable tuple of floats."""
        return tuple(float(x) for x in self._data)

    def _check_index(self, index) -> int:
        if not _is_integer(index):
            raise InvalidIndexError(INVALID_INDEX.format(index))
        if index < 0 or index >= self._dimension:
            raise IndexOutOfBoundsError(OUT_OF_BOUNDS.format(index, self._dimension))
        return int(index)

    def _check_compatible(self, other: Vector) -> None:
        if not isinstance(other, Vector):
            raise InvalidArgumentError(NOT_A_VECTOR.format(other))
        if self._dimension != other._dimension:
            raise DimensionMismatchError(
                INVALID_OPERATION.format(self._dimension, other._dimension)
            )

    def get(self, index: int) -> float:
        """Return the coordinate at ``index``.

        Raises:
            InvalidIndexError: If ``index`` is not an integer.
            IndexOutOfBoundsError: If ``index`` is outside ``[0, dimension)``.
        """
        return float(self._data[self._check_index(index)])

    def set(self, index: int, value: Numeric) -> None:
        """Overwrite the coordinate at ``index`` with ``value``.

        The index is validated before the value, and the vector is left
        untouched if either check fails.

        Raises:
            InvalidIndexError: If ``index`` is not an integer.
            IndexOutOfBoundsError: If ``index`` is outside ``[0, dimension)``.
            InvalidArgumentError: If ``value`` is not a finite number.
        """
        index = self._check_index(index)
        self._data[index] = _to_real(value)

    def __getitem__(self, index: int) -> float:
        return self.get(index)

    def __setitem__(self, index: int, value: Numeric) -> None:
        self.set(index, value)

    def __delitem__(self, index: int) -> None:
        raise UnsupportedOperationError(CANNOT_DELETE)

    def __len__(self) -> int:
        return self._dimension

    def __iter__(self) -> Iterator[float]:
        return iter(self.coordinates)

    def __eq__(self, __value: object) -> bool:
        """Vectors are equal when they have the same dimension and coordinates."""
        if not isinstance(__value, Vector):
            return NotImplemented
        return self._dimension == __value._dimension and bool(
            np.array_equal(self._data, __value._data)
        )

    # Vectors are mutable through set(), so they can not be dict keys.
    __hash__ = None

    def __repr__(self) -> str:
        return f"Vector({list(self.coordinates)})"

    def copy(self) -> Vector:
        """Return an independent copy of this vector."""
        return Vector._from_array(self._data.copy())

    def to_numpy(self) -> np.ndarray:
        """Return a copy of the coordinates as a NumPy array."""
        return self._data.copy()

    def length(self) -> float:
        """Euclidean norm of the vector."""
        return float(np.sqrt(np.sum(self._data * self._data)))

    def add(self, other: Vector) -> Vector:
        """Element-wise sum with ``other``."""
        self._check_compatible(other)
        return Vector._from_array(self._data + other._data)

    def subtract(self, other: Vector) -> Vector:
        """Element-wise difference ``self - other``."""
        self._check_compatible(other)
        return Vector._from_array(self._data - other._data)

    __add__ = add
    __sub__ = subtract

    def distance(self, other: Vector) -> float:
        """Euclidean distance to ``other``, the length of the difference."""
        return self.subtract(other).length()

    def min(self, other: Vector) -> Vector:
        """Vector of the smaller coordinate of ``self`` and ``other`` at each position."""
        self._check_compatible(other)
        return Vector._from_array(np.minimum(self._data, other._data))

    def max(self, other: Vector) -> Vector:
        """Vector of the larger coordinate of ``self`` and ``other`` at each position."""
        self._check_compatible(other)
        return Vector._from_array(np.maximum(self._data, other._data))

    @staticmethod
    def _as_group(vectors: Iterable[Vector]) -> List[Vector]:
        if isinstance(vectors, Vector) or not isinstance(vectors, Iterable):
            raise InvalidArgumentError(EMPTY_GROUP)
        group = list(vectors)
        if not group:
            raise InvalidArgumentError(EMPTY_GROUP)
        for v in group:
            if not isinstance(v, Vector):
                raise InvalidArgumentError(NOT_A_VECTOR.format(v))
        return group

    @classmethod
    def _fold(
        cls, vectors: Iterable[Vector], op: Callable[[Vector, Vector], Vector]
    ) -> Vector:
        group = cls._as_group(vectors)
        result = group[0]
        for v in group:
            result = op(result, v)
        return result

    @classmethod
    def group_min(cls, vectors: Sequence[Vector]) -> Vector:
        """Coordinate-wise minimum over a non-empty sequence of vectors.

        Raises:
            InvalidArgumentError: If ``vectors`` is empty or holds a non-Vector.
            DimensionMismatchError: If the dimensions are not all equal.
        """
        return cls._fold(vectors, cls.min)

    @classmethod
    def group_max(cls, vectors: Sequence[Vector]) -> Vector:
        """Coordinate-wise maximum over a non-empty sequence of vectors.

        Raises:
            InvalidArgumentError: If ``vectors`` is empty or holds a non-Vector.
            DimensionMismatchError: If the dimensions are not all equal.
        """
        return cls._fold(vectors, cls.max)

    @classmethod
    def average(cls, vectors: Sequence[Vector]) -> Vector:
        """Coordinate-wise arithmetic mean of a non-empty sequence of vectors."""
        group = cls._as_group(vectors)
        first = group[0]
        for v in group[1:]:
            first._check_compatible(v)
        return Vector._from_array(np.mean(np.stack([v._data for v in group]), axis=0))

    @staticmethod
    def consistent(vectors: Iterable[Vector]) -> bool:
        """Check that ``vectors`` is a non-empty collection of Vectors of one dimension."""
        if isinstance(vectors, Vector) or not isinstance(vectors, Iterable):
            return False
        group = list(vectors)
        if not group or not all(isinstance(v, Vector) for v in group):
            return False
        dimension = group[0].dimension
        return all(v.dimension == dimension for v in group)
