"""Points and vectors in homogeneous coordinates.

A tuple stores (x, y, z, w) where w tags its kind: 1 for a Point, 0 for a
Vector. The tag is carried through the arithmetic so that a 4x4 affine
matrix translates points but leaves vectors unchanged.

    Point + Vector -> Point        Point - Point  -> Vector
    Vector + Point -> Point        Point - Vector -> Point
    Vector + Vector -> Vector      Vector - Vector -> Vector

Operand pairs outside this table are rejected with TypeError.
"""

from __future__ import annotations

import math
import numbers
from typing import Union

import numpy as np

from raytracer.errors import DivisionByZeroError
from raytracer.tolerance import DEFAULT_MARGIN, approx_equal_arrays

Scalar = Union[int, float, np.floating]


class HomogeneousTuple:
    """Immutable (x, y, z, w) value shared by Point and Vector."""

    __slots__ = ("_xyzw",)

    # Type tag assigned by the public constructor
    W = 0.0

    def __init__(self, x: float, y: float, z: float):
        self._init_components(x, y, z, self.W)

    @classmethod
    def _from_components(cls, x: float, y: float, z: float, w: float) -> HomogeneousTuple:
        """Build a tuple with an explicit w, bypassing the type tag."""
        obj = cls.__new__(cls)
        obj._init_components(x, y, z, w)
        return obj

    def _init_components(self, x: float, y: float, z: float, w: float) -> None:
        xyzw = np.array([x, y, z, w], dtype=np.float64)
        xyzw.flags.writeable = False
        object.__setattr__(self, "_xyzw", xyzw)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def x(self) -> float:
        return float(self._xyzw[0])

    @property
    def y(self) -> float:
        return float(self._xyzw[1])

    @property
    def z(self) -> float:
        return float(self._xyzw[2])

    @property
    def w(self) -> float:
        return float(self._xyzw[3])

    def to_array(self) -> np.ndarray:
        """Return a writable copy of the four components."""
        return self._xyzw.copy()

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        # w is a type tag and is covered by the type check above
        return approx_equal_arrays(self._xyzw[:3], other._xyzw[:3], DEFAULT_MARGIN)

    __hash__ = None

    def __repr__(self) -> str:
        name = type(self).__name__
        if self.w == self.W:
            return f"{name}({self.x!r}, {self.y!r}, {self.z!r})"
        return f"{name}({self.x!r}, {self.y!r}, {self.z!r}, w={self.w!r})"

    def _check_divisor(self, scalar: Scalar) -> None:
        if scalar == 0:
            raise DivisionByZeroError(f"Cannot divide {type(self).__name__} by zero")


class Point(HomogeneousTuple):
    """A position in space (w = 1)."""

    __slots__ = ()

    W = 1.0

    def __add__(self, other):
        if isinstance(other, Vector):
            return Point._from_components(
                self.x + other.x, self.y + other.y, self.z + other.z, self.w
            )
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y, self.z - other.z)
        if isinstance(other, Vector):
            return Point._from_components(
                self.x - other.x, self.y - other.y, self.z - other.z, self.w
            )
        return NotImplemented

    def __neg__(self) -> Point:
        return Point(-self.x, -self.y, -self.z)

    def __mul__(self, other):
        # Scaling a point also scales w; a true homogeneous point would keep w = 1
        if isinstance(other, numbers.Real):
            return Point._from_components(*(self._xyzw * other))
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, numbers.Real):
            self._check_divisor(other)
            return self * (1.0 / other)
        return NotImplemented


class Vector(HomogeneousTuple):
    """A displacement in space (w = 0)."""

    __slots__ = ()

    W = 0.0

    def __add__(self, other):
        if isinstance(other, Vector):
            return Vector(self.x + other.x, self.y + other.y, self.z + other.z)
        if isinstance(other, Point):
            return Point._from_components(
                self.x + other.x, self.y + other.y, self.z + other.z, other.w
            )
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Vector):
            return Vector(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    def __mul__(self, other):
        if isinstance(other, Vector):
            return self.dot(other)
        if isinstance(other, numbers.Real):
            return Vector(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, numbers.Real):
            return self * other
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, numbers.Real):
            self._check_divisor(other)
            return self * (1.0 / other)
        return NotImplemented

    def dot(self, other: Vector) -> float:
        """Dot product of two vectors.

        Args:
            other: Right-hand vector

        Returns:
            x1*x2 + y1*y2 + z1*z2
        """
        if not isinstance(other, Vector):
            raise TypeError(f"dot() expects a Vector, got {type(other).__name__}")
        return float(np.dot(self._xyzw[:3], other._xyzw[:3]))

    def cross(self, other: Vector) -> Vector:
        """Right-handed cross product of two vectors.

        Args:
            other: Right-hand vector

        Returns:
            Vector perpendicular to both operands
        """
        if not isinstance(other, Vector):
            raise TypeError(f"cross() expects a Vector, got {type(other).__name__}")
        return Vector(*np.cross(self._xyzw[:3], other._xyzw[:3]))

    def magnitude(self) -> float:
        """Euclidean length sqrt(x^2 + y^2 + z^2), scaled to avoid overflow."""
        return math.hypot(self.x, self.y, self.z)

    def normalize(self) -> Vector:
        """Scale the vector to unit length.

        Returns:
            Vector with magnitude 1 pointing the same way

        Raises:
            DivisionByZeroError: If the magnitude is zero or not finite
        """
        magnitude = self.magnitude()
        if magnitude == 0.0 or not math.isfinite(magnitude):
            raise DivisionByZeroError(f"Cannot normalize a vector of magnitude {magnitude}")
        return Vector(self.x / magnitude, self.y / magnitude, self.z / magnitude)
