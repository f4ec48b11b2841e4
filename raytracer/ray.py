"""Rays cast from an origin point along a direction vector."""

from __future__ import annotations

from dataclasses import dataclass

from raytracer.tuples import Point, Vector


@dataclass(frozen=True)
class Ray:
    """Half-line from an origin point along a direction vector.

    Positions along the ray are P(t) = origin + direction * t.
    """

    origin: Point
    direction: Vector

    def __post_init__(self):
        if not isinstance(self.origin, Point):
            raise TypeError(f"origin must be a Point, got {type(self.origin).__name__}")
        if not isinstance(self.direction, Vector):
            raise TypeError(
                f"direction must be a Vector, got {type(self.direction).__name__}"
            )

    def at(self, t: float) -> Point:
        """Point reached after travelling t direction-lengths from the origin."""
        return self.origin + self.direction * t
