"""Fixed-size square matrices.

This module implements 2x2, 3x3 and 4x4 matrices with cofactor-expansion
determinants and adjugate-based inversion. Matrix4 is the affine transform
type: it multiplies other 4x4 matrices and applies itself to points and
vectors in homogeneous coordinates.
"""

from __future__ import annotations

import logging
import operator
from typing import List, Sequence, Union

import numpy as np

from raytracer.errors import IndexOutOfRangeError, NotInvertibleError
from raytracer.tolerance import (
    DETERMINANT_MARGIN,
    FLOAT_MARGIN,
    approx_equal,
    approx_equal_arrays,
)
from raytracer.tuples import HomogeneousTuple

logger = logging.getLogger(__name__)


class SquareMatrix:
    """Immutable NxN grid of float64 values addressed by (row, col).

    Subclasses fix the dimension through the ``size`` class attribute.
    """

    __slots__ = ("_data",)

    size = 0

    def __init__(self, rows: Union[Sequence[Sequence[float]], np.ndarray]):
        data = np.array(rows, dtype=np.float64)
        if data.shape != (self.size, self.size):
            raise ValueError(
                f"{type(self).__name__} expects {self.size}x{self.size} values, "
                f"got shape {data.shape}"
            )
        data.flags.writeable = False
        object.__setattr__(self, "_data", data)

    @classmethod
    def zeros(cls) -> SquareMatrix:
        return cls(np.zeros((cls.size, cls.size)))

    @classmethod
    def identity(cls) -> SquareMatrix:
        return cls(np.eye(cls.size))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def _check_index(self, row: int, col: int) -> None:
        for label, index in (("row", row), ("col", col)):
            index = operator.index(index)
            if not 0 <= index < self.size:
                raise IndexOutOfRangeError(
                    f"{label} {index} out of range for {self.size}x{self.size} matrix"
                )

    def get(self, row: int, col: int) -> float:
        """Return the element at (row, col).

        Raises:
            IndexOutOfRangeError: If row or col is outside [0, size)
        """
        self._check_index(row, col)
        return float(self._data[row, col])

    def __getitem__(self, key: tuple[int, int]) -> float:
        row, col = key
        return self.get(row, col)

    def set(self, row: int, col: int, value: float) -> SquareMatrix:
        """Return a copy of this matrix with the element at (row, col) replaced.

        Raises:
            IndexOutOfRangeError: If row or col is outside [0, size)
        """
        self._check_index(row, col)
        data = self._data.copy()
        data[row, col] = value
        return type(self)(data)

    def transpose(self) -> SquareMatrix:
        return type(self)(self._data.T)

    def determinant(self) -> float:
        raise NotImplementedError

    def is_invertible(self) -> bool:
        """A matrix is invertible when its determinant is not approximately zero."""
        return not approx_equal(self.determinant(), 0.0, DETERMINANT_MARGIN)

    def to_array(self) -> np.ndarray:
        """Return a writable copy of the matrix elements."""
        return self._data.copy()

    def rows(self) -> List[List[float]]:
        return self._data.tolist()

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return approx_equal_arrays(self._data, other._data, FLOAT_MARGIN)

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.rows()!r})"


class Matrix2(SquareMatrix):
    """2x2 matrix, the base case of cofactor expansion."""

    __slots__ = ()

    size = 2

    def determinant(self) -> float:
        (a, b), (c, d) = self._data
        return float(a * d - b * c)


class CofactorMatrix(SquareMatrix):
    """Matrix whose determinant is found by cofactor expansion along row 0.

    Each level removes one row and one column, recursing down to the
    2x2 determinant.
    """

    __slots__ = ()

    # Matrix type produced by submatrix(), one dimension smaller
    submatrix_type: type = None

    def submatrix(self, row: int, col: int) -> SquareMatrix:
        """Remove one row and one column.

        Args:
            row: Index of the row to drop
            col: Index of the column to drop

        Returns:
            Matrix one dimension smaller than this one

        Raises:
            IndexOutOfRangeError: If row or col is outside [0, size)
        """
        self._check_index(row, col)
        data = np.delete(np.delete(self._data, row, axis=0), col, axis=1)
        return self.submatrix_type(data)

    def minor(self, row: int, col: int) -> float:
        """Determinant of the submatrix at (row, col)."""
        return self.submatrix(row, col).determinant()

    def cofactor(self, row: int, col: int) -> float:
        """Minor at (row, col), negated when row + col is odd."""
        minor = self.minor(row, col)
        return -minor if (row + col) % 2 == 1 else minor

    def determinant(self) -> float:
        return float(
            sum(self._data[0, col] * self.cofactor(0, col) for col in range(self.size))
        )


class Matrix3(CofactorMatrix):
    __slots__ = ()

    size = 3
    submatrix_type = Matrix2


class Matrix4(CofactorMatrix):
    """4x4 affine transform matrix.

    ``m @ other`` and ``m * other`` multiply by another Matrix4 or apply the
    matrix to a Point or Vector. When composing transforms, the rightmost
    factor is applied first.
    """

    __slots__ = ()

    size = 4
    submatrix_type = Matrix3

    def inverse(self) -> Matrix4:
        """Invert the matrix through its adjugate.

        Returns:
            Matrix4 such that m @ m.inverse() is the identity

        Raises:
            NotInvertibleError: If the determinant is approximately zero
        """
        det = self.determinant()
        if approx_equal(det, 0.0, DETERMINANT_MARGIN):
            raise NotInvertibleError(f"Matrix is not invertible (determinant={det})")

        inverse = np.zeros((4, 4))
        for row in range(4):
            for col in range(4):
                # Writing to [col, row] transposes the cofactor matrix
                inverse[col, row] = self.cofactor(row, col) / det

        logger.debug(f"Inverted 4x4 matrix: determinant={det:.5f}")
        return Matrix4(inverse)

    def multiply(self, other: Matrix4) -> Matrix4:
        """Row-by-column product self x other."""
        return Matrix4(self._data @ other._data)

    def apply(self, tup: HomogeneousTuple) -> HomogeneousTuple:
        """Transform a point or vector.

        The tuple is treated as a 4-component column; the result has the
        same type as the input, with w set to that type's tag.

        Args:
            tup: Point or Vector to transform

        Returns:
            Transformed tuple of the same type
        """
        x, y, z, _ = self._data @ tup.to_array()
        return type(tup)(x, y, z)

    def __matmul__(self, other):
        if isinstance(other, Matrix4):
            return self.multiply(other)
        if isinstance(other, HomogeneousTuple):
            return self.apply(other)
        return NotImplemented

    __mul__ = __matmul__


Matrix2.IDENTITY = Matrix2.identity()
Matrix3.IDENTITY = Matrix3.identity()
Matrix4.IDENTITY = Matrix4.identity()
