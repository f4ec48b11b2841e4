"""Exception types raised by the raytracer package."""

from __future__ import annotations


class RaytracerError(Exception):
    """Base exception for raytracer-specific errors"""
    pass


class DivisionByZeroError(RaytracerError, ZeroDivisionError):
    """Division by zero, e.g. normalizing a zero-length vector"""
    pass


class NotInvertibleError(RaytracerError, ValueError):
    """Inverting a matrix whose determinant is approximately zero"""
    pass


class IndexOutOfRangeError(RaytracerError, IndexError):
    """Row or column index outside the matrix bounds"""
    pass


class ConfigurationError(RaytracerError):
    """Error in configuration or setup"""
    pass
