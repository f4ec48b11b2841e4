"""Approximate floating-point comparison.

Every equality and invertibility check in the package goes through a
FloatMargin: an absolute epsilon, optionally widened by a distance in
units in the last place (ULPs) for values that accumulated rounding noise
over chained matrix products.
"""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from typing import Optional

import numpy as np

# Absolute tolerance for scalar comparisons.
EPSILON = 1e-5

# Representable doubles two values may be apart under the ULP-aware margin.
ULPS = 4


def ulps_between(a: float, b: float) -> Optional[int]:
    """Count the representable doubles between two floats.

    Args:
        a: First value
        b: Second value

    Returns:
        Distance in ULPs, or None when either value is NaN or the two
        values have opposite signs
    """
    if math.isnan(a) or math.isnan(b):
        return None
    if math.copysign(1.0, a) != math.copysign(1.0, b):
        return None

    # IEEE 754 doubles of the same sign are ordered like their bit patterns
    bits_a = int(np.float64(a).view(np.int64))
    bits_b = int(np.float64(b).view(np.int64))
    return abs(bits_a - bits_b)


@dataclass(frozen=True)
class FloatMargin:
    """Tolerance used to decide whether two floats are equal.

    Attributes:
        epsilon: Largest absolute difference still considered equal
        ulps: Optional ULP distance accepted when the absolute check fails;
            None disables the ULP check
    """

    epsilon: float = EPSILON
    ulps: Optional[int] = None

    def __post_init__(self):
        if self.epsilon < 0:
            raise ValueError(f"epsilon must be non-negative, got {self.epsilon}")
        if self.ulps is not None and self.ulps < 0:
            raise ValueError(f"ulps must be non-negative, got {self.ulps}")

    def approx_eq(self, a: float, b: float) -> bool:
        """Return True if a and b are equal within this margin."""
        if a == b:
            return True
        if math.isnan(a) or math.isnan(b):
            return False
        if abs(a - b) <= self.epsilon:
            return True
        if self.ulps is None:
            return False

        distance = ulps_between(a, b)
        return distance is not None and distance <= self.ulps


# Absolute-epsilon policy used for scalars and tuples.
DEFAULT_MARGIN = FloatMargin(EPSILON)

# Epsilon plus ULP policy used for matrix equality.
FLOAT_MARGIN = FloatMargin(EPSILON, ULPS)

# Machine-epsilon plus ULP policy used to test a determinant against zero.
DETERMINANT_MARGIN = FloatMargin(sys.float_info.epsilon, ULPS)


def approx_equal(a: float, b: float, margin: FloatMargin = DEFAULT_MARGIN) -> bool:
    """Compare two scalars under the given margin.

    Args:
        a: First value
        b: Second value
        margin: Tolerance policy, absolute epsilon by default

    Returns:
        True if the values are approximately equal
    """
    return margin.approx_eq(float(a), float(b))


def approx_equal_arrays(
    a: np.ndarray, b: np.ndarray, margin: FloatMargin = DEFAULT_MARGIN
) -> bool:
    """Compare two arrays elementwise under the given margin.

    Args:
        a: First array
        b: Second array
        margin: Tolerance policy applied to every element pair

    Returns:
        True if the shapes match and every element pair is approximately equal
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape:
        return False

    return all(margin.approx_eq(x, y) for x, y in zip(a.flat, b.flat))
