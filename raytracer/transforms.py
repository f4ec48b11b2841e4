"""Affine transform builders.

Each function returns a Matrix4. Transforms compose by matrix
multiplication, and the rightmost factor is applied to a tuple first:
``translation(...) @ scaling(...) @ rotation_z(...)`` rotates, then scales,
then translates. ``chain`` takes transforms in application order instead.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from raytracer.matrix import Matrix4

logger = logging.getLogger(__name__)


def translation(x: float, y: float, z: float) -> Matrix4:
    """Move points by (x, y, z); vectors are unaffected."""
    return Matrix4([
        [1, 0, 0, x],
        [0, 1, 0, y],
        [0, 0, 1, z],
        [0, 0, 0, 1]
    ])


def scaling(x: float, y: float, z: float) -> Matrix4:
    """Scale each axis independently; a negative factor reflects."""
    return Matrix4(np.diag([x, y, z, 1.0]))


def rotation_x(r: float) -> Matrix4:
    """Rotate about the x axis.

    Args:
        r: Angle in radians

    Returns:
        4x4 rotation matrix
    """
    cos, sin = math.cos(r), math.sin(r)
    return Matrix4([
        [1, 0, 0, 0],
        [0, cos, -sin, 0],
        [0, sin, cos, 0],
        [0, 0, 0, 1]
    ])


def rotation_y(r: float) -> Matrix4:
    """Rotate about the y axis.

    Args:
        r: Angle in radians

    Returns:
        4x4 rotation matrix
    """
    cos, sin = math.cos(r), math.sin(r)
    return Matrix4([
        [cos, 0, sin, 0],
        [0, 1, 0, 0],
        [-sin, 0, cos, 0],
        [0, 0, 0, 1]
    ])


def rotation_z(r: float) -> Matrix4:
    """Rotate about the z axis.

    Args:
        r: Angle in radians

    Returns:
        4x4 rotation matrix
    """
    cos, sin = math.cos(r), math.sin(r)
    return Matrix4([
        [cos, -sin, 0, 0],
        [sin, cos, 0, 0],
        [0, 0, 1, 0],
        [0, 0, 0, 1]
    ])


def shearing(xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Matrix4:
    """Shear each coordinate in proportion to the other two.

    Args:
        xy: x moved in proportion to y
        xz: x moved in proportion to z
        yx: y moved in proportion to x
        yz: y moved in proportion to z
        zx: z moved in proportion to x
        zy: z moved in proportion to y

    Returns:
        4x4 shearing matrix
    """
    return Matrix4([
        [1, xy, xz, 0],
        [yx, 1, yz, 0],
        [zx, zy, 1, 0],
        [0, 0, 0, 1]
    ])


def chain(*transforms: Matrix4) -> Matrix4:
    """Compose transforms given in the order they should be applied.

    ``chain(a, b, c)`` equals ``c @ b @ a``: a is applied first.

    Args:
        *transforms: Matrix4 transforms, first-applied first

    Returns:
        Combined transform, or the identity if none are given
    """
    combined = Matrix4.IDENTITY
    for transform in transforms:
        combined = transform @ combined

    logger.debug(f"Chained {len(transforms)} transforms")
    return combined
