#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Equirectangular projection.

Planar coordinates are a linear function of latitude and longitude:
x = wrapped longitude * cos(true scale latitude), y = latitude. Longitude is
measured from the central meridian and wrapped so the antimeridian is a
single seam.
"""
import math
from dataclasses import dataclass
from typing import Any, Dict, Tuple

import numpy as np

from submaptive.core.config import MAX_TRUE_SCALE_LAT
from submaptive.core.exceptions import InvalidParameterError, UndefinedSampleError
from submaptive.core.geometry import (
    Dimensions,
    PlanarBounds,
    Point,
    clamp_latitude,
    wrap_longitude,
)


@dataclass(frozen=True)
class Equirectangular:
    """
    Equirectangular (plate carrée when true_scale_lat is 0) projection.

    Parameters
    ----------
    central_long : float, optional
        Longitude of the central meridian in [-180, 180], by default 0.
    true_scale_lat : float, optional
        Latitude of true scale in the open interval (-90, 90), by default 0.
        The horizontal scale is cos(true_scale_lat).

    Raises
    ------
    InvalidParameterError
        If a parameter is not finite or lies outside its domain.
    """
    central_long: float = 0.0
    true_scale_lat: float = 0.0

    def __post_init__(self):
        central_long = float(self.central_long)
        true_scale_lat = float(self.true_scale_lat)

        if not math.isfinite(central_long) or not -180.0 <= central_long <= 180.0:
            raise InvalidParameterError(
                f"central_long must lie in [-180, 180], got {self.central_long}"
            )
        # cos(+-90) is zero, which collapses the horizontal axis
        if not math.isfinite(true_scale_lat) or not -90.0 < true_scale_lat < 90.0:
            raise InvalidParameterError(
                f"true_scale_lat must lie in (-90, 90), got {self.true_scale_lat}"
            )

        object.__setattr__(self, "central_long", central_long)
        object.__setattr__(self, "true_scale_lat", true_scale_lat)

    @classmethod
    def clamped(cls, central_long: float = 0.0, true_scale_lat: float = 0.0) -> "Equirectangular":
        """
        Build a projection from unchecked external input.

        Values are clamped into the parameter domain instead of rejected;
        true_scale_lat is limited to +-MAX_TRUE_SCALE_LAT. Non-finite values
        still raise InvalidParameterError.
        """
        for name, value in (("central_long", central_long), ("true_scale_lat", true_scale_lat)):
            if not math.isfinite(float(value)):
                raise InvalidParameterError(f"{name} must be finite, got {value}")
        return cls(
            central_long=min(180.0, max(-180.0, float(central_long))),
            true_scale_lat=min(MAX_TRUE_SCALE_LAT, max(-MAX_TRUE_SCALE_LAT, float(true_scale_lat))),
        )

    @property
    def scale(self) -> float:
        """Horizontal scale factor cos(true_scale_lat)."""
        return math.cos(math.radians(self.true_scale_lat))

    def parameters(self) -> Dict[str, Any]:
        return {"central_long": self.central_long, "true_scale_lat": self.true_scale_lat}

    def bounds(self) -> PlanarBounds:
        half_width = 180.0 * self.scale
        return PlanarBounds(x_min=-half_width, y_min=-90.0, x_max=half_width, y_max=90.0)

    def dimensions(self) -> Dimensions:
        return self.bounds().to_dimensions()

    def project(self, point: Point) -> Tuple[float, float]:
        latitude, longitude = point
        x = wrap_longitude(longitude - self.central_long) * self.scale
        if not math.isfinite(x):
            raise UndefinedSampleError(f"Cannot project {point}")
        return x, latitude

    def invert(self, projected_point: Tuple[float, float]) -> Point:
        x, y = projected_point
        if not (math.isfinite(x) and math.isfinite(y)):
            raise UndefinedSampleError(f"Cannot invert {projected_point}")
        longitude = wrap_longitude(x / self.scale + self.central_long)
        return Point(clamp_latitude(y), longitude)

    def project_array(self, latitude: np.ndarray, longitude: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Vectorised ``project``; NaN input propagates to NaN output."""
        latitude = np.asarray(latitude, dtype=np.float64)
        longitude = np.asarray(longitude, dtype=np.float64)
        x = wrap_longitude(longitude - self.central_long) * self.scale
        return x, latitude.copy()

    def invert_array(self, x: np.ndarray, y: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Vectorised ``invert`` returning (latitude, longitude) arrays."""
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        longitude = wrap_longitude(x / self.scale + self.central_long)
        return clamp_latitude(y), longitude
