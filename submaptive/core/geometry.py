#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Geographic and planar value types.

This module holds the coordinate types every projection converts through:
geographic points, pixel dimensions and planar bounds, plus the longitude
wrapping and latitude clamping helpers shared by the projections.
"""
import math
from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np

from submaptive.core.exceptions import InvalidParameterError

ArrayLike = Union[float, np.ndarray]


def wrap_longitude(longitude: ArrayLike) -> ArrayLike:
    """
    Wrap longitudes into [-180, 180).

    Parameters
    ----------
    longitude : float or np.ndarray
        Longitude(s) in degrees, any range.

    Returns
    -------
    float or np.ndarray
        Longitude(s) wrapped so that +180 and -180 form a single seam.
    """
    return (longitude + 540.0) % 360.0 - 180.0


def clamp_latitude(latitude: ArrayLike) -> ArrayLike:
    """Clip latitude(s) to [-90, 90]."""
    if isinstance(latitude, np.ndarray):
        return np.clip(latitude, -90.0, 90.0)
    return min(90.0, max(-90.0, latitude))


@dataclass(frozen=True)
class Point:
    """
    Geographic location in degrees.

    Attributes
    ----------
    latitude : float
        Latitude in [-90, 90].
    longitude : float
        Longitude in [-180, 180].
    """
    latitude: float
    longitude: float

    def __post_init__(self):
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            raise InvalidParameterError(
                f"Point coordinates must be finite, got ({self.latitude}, {self.longitude})"
            )
        if not -90.0 <= self.latitude <= 90.0:
            raise InvalidParameterError(f"Latitude {self.latitude} outside [-90, 90]")
        if not -180.0 <= self.longitude <= 180.0:
            raise InvalidParameterError(f"Longitude {self.longitude} outside [-180, 180]")

    @classmethod
    def from_degrees(cls, latitude: float, longitude: float) -> "Point":
        """
        Build a point from unconstrained degrees.

        Longitude is wrapped and latitude clamped instead of rejected.
        Non-finite input still raises InvalidParameterError.
        """
        if not (math.isfinite(latitude) and math.isfinite(longitude)):
            raise InvalidParameterError(
                f"Point coordinates must be finite, got ({latitude}, {longitude})"
            )
        return cls(clamp_latitude(latitude), wrap_longitude(longitude))

    def __iter__(self):
        yield self.latitude
        yield self.longitude


@dataclass(frozen=True)
class Dimensions:
    """Pixel extent of a projection's planar space at unit scale."""
    width: int
    height: int

    def __post_init__(self):
        for name, value in (("width", self.width), ("height", self.height)):
            if int(value) != value or value <= 0:
                raise InvalidParameterError(f"Dimensions {name} must be a positive integer, got {value}")
            object.__setattr__(self, name, int(value))

    @property
    def shape(self) -> Tuple[int, int]:
        """Numpy-style (rows, columns) shape."""
        return (self.height, self.width)

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class PlanarBounds:
    """
    Continuous planar extent reachable by a projection's forward transform.

    The linear mapping between a raster grid and these bounds defines how
    pixel indices convert to planar coordinates and back.
    """
    x_min: float
    y_min: float
    x_max: float
    y_max: float

    def __post_init__(self):
        values = (self.x_min, self.y_min, self.x_max, self.y_max)
        if not all(math.isfinite(v) for v in values):
            raise InvalidParameterError(f"Planar bounds must be finite, got {values}")
        if self.x_max <= self.x_min or self.y_max <= self.y_min:
            raise InvalidParameterError(f"Planar bounds must have positive extent, got {values}")

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    def to_dimensions(self) -> Dimensions:
        """Round the extent to whole pixels, never below one."""
        return Dimensions(
            width=max(1, int(round(self.width))),
            height=max(1, int(round(self.height))),
        )
