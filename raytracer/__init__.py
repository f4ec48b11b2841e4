"""Homogeneous-coordinate linear algebra for a ray tracer.

Points and vectors in homogeneous coordinates, fixed-size square matrices
with cofactor-based determinants and inversion, and the affine transforms
built from them.
"""

from __future__ import annotations

__version__ = "0.1.0"
