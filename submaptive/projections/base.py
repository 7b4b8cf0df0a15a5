#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Projection contract.

A projection is a pair of mutually near-inverse functions between geographic
points and planar coordinates, together with the planar extent its forward
transform can reach. Implementations are immutable values; the resampler
shares them between workers without locking.

Projections may additionally provide ``project_array(lat, lon)`` and
``invert_array(x, y)`` evaluating whole numpy arrays at once and returning
NaN where a sample is undefined. ``project_points`` and ``invert_points``
use that fast path when present and fall back to the scalar methods
otherwise.
"""
from typing import Protocol, Tuple, runtime_checkable

import numpy as np

from submaptive.core.exceptions import InvalidParameterError
from submaptive.core.geometry import Dimensions, PlanarBounds, Point


@runtime_checkable
class Projection(Protocol):
    """Capabilities every projection kind provides."""

    def dimensions(self) -> Dimensions:
        """Pixel extent of the planar space at unit scale."""
        ...

    def bounds(self) -> PlanarBounds:
        """Exact planar extent reachable by ``project``."""
        ...

    def project(self, point: Point) -> Tuple[float, float]:
        """Geographic to planar. Raises UndefinedSampleError where undefined."""
        ...

    def invert(self, projected_point: Tuple[float, float]) -> Point:
        """Planar to geographic. Raises UndefinedSampleError where undefined."""
        ...


def project_points(
    projection: Projection,
    latitude: np.ndarray,
    longitude: np.ndarray
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Forward-project arrays of geographic coordinates.

    Parameters
    ----------
    projection : Projection
        Projection to evaluate.
    latitude, longitude : np.ndarray
        Same-shaped arrays in degrees. NaN entries stay NaN.

    Returns
    -------
    tuple
        Planar (x, y) arrays, NaN wherever the sample is undefined.
    """
    fast_path = getattr(projection, "project_array", None)
    if fast_path is not None:
        return fast_path(latitude, longitude)

    def forward(lat: float, lon: float) -> Tuple[float, float]:
        try:
            return projection.project(Point(lat, lon))
        # UndefinedSampleError is an ArithmeticError
        except (ArithmeticError, InvalidParameterError):
            return np.nan, np.nan

    return _evaluate(forward, latitude, longitude)


def invert_points(
    projection: Projection,
    x: np.ndarray,
    y: np.ndarray
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Invert arrays of planar coordinates.

    Returns
    -------
    tuple
        (latitude, longitude) arrays, NaN wherever the sample is undefined.
    """
    fast_path = getattr(projection, "invert_array", None)
    if fast_path is not None:
        return fast_path(x, y)

    def inverse(px: float, py: float) -> Tuple[float, float]:
        try:
            point = projection.invert((px, py))
        except (ArithmeticError, InvalidParameterError):
            return np.nan, np.nan
        return point.latitude, point.longitude

    return _evaluate(inverse, x, y)


def _evaluate(func, first: np.ndarray, second: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    first = np.asarray(first, dtype=np.float64)
    second = np.asarray(second, dtype=np.float64)
    out_first = np.full(first.shape, np.nan)
    out_second = np.full(first.shape, np.nan)

    valid = np.isfinite(first) & np.isfinite(second)
    for index in zip(*np.nonzero(valid)):
        out_first[index], out_second[index] = func(float(first[index]), float(second[index]))

    return out_first, out_second
