#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Pixel/planar coordinate mapping and bilinear sampling.

A raster of width W and height H laid over a projection's planar bounds maps
pixel corner (0, 0) to (x_min, y_max) and pixel corner (W, H) to
(x_max, y_min); rows grow downwards while planar y grows upwards.
"""
from typing import NamedTuple, Tuple, Union

import numpy as np
from scipy import ndimage

from submaptive.core.config import EDGE_TOLERANCE
from submaptive.core.geometry import PlanarBounds
from submaptive.core.raster import as_rgba

ArrayLike = Union[float, np.ndarray]


def pixel_to_planar(
    px: ArrayLike,
    py: ArrayLike,
    bounds: PlanarBounds,
    width: int,
    height: int
) -> Tuple[ArrayLike, ArrayLike]:
    """
    Convert (fractional) pixel coordinates to planar coordinates.

    Parameters
    ----------
    px, py : float or np.ndarray
        Column and row coordinates.
    bounds : PlanarBounds
        Planar extent covered by the raster.
    width, height : int
        Raster size in pixels.

    Returns
    -------
    tuple
        Planar (x, y).
    """
    x = bounds.x_min + px * (bounds.width / width)
    y = bounds.y_max - py * (bounds.height / height)
    return x, y


def planar_to_pixel(
    x: ArrayLike,
    y: ArrayLike,
    bounds: PlanarBounds,
    width: int,
    height: int
) -> Tuple[ArrayLike, ArrayLike]:
    """Inverse of pixel_to_planar: planar coordinates to fractional pixels."""
    px = (x - bounds.x_min) * (width / bounds.width)
    py = (bounds.y_max - y) * (height / bounds.height)
    return px, py


class SourceRaster(NamedTuple):
    """
    Source raster prepared for interpolation.

    Attributes
    ----------
    padded : np.ndarray
        (H + 1, W + 1, 4) float32 copy of the raster. The extra column
        repeats column 0 so the last column interpolates across the
        antimeridian; the extra row repeats the bottom row.
    width : int
        Width of the original raster.
    height : int
        Height of the original raster.
    """
    padded: np.ndarray
    width: int
    height: int

    @classmethod
    def from_image(cls, image: np.ndarray) -> "SourceRaster":
        image = as_rgba(image)
        height, width = image.shape[:2]
        padded = np.empty((height + 1, width + 1, 4), dtype=np.float32)
        padded[:height, :width] = image
        padded[:height, width] = image[:, 0]
        padded[height] = padded[height - 1]
        return cls(padded, width, height)


def sample_bilinear(source: SourceRaster, fx: np.ndarray, fy: np.ndarray) -> np.ndarray:
    """
    Bilinearly sample a source raster at fractional pixel coordinates.

    Parameters
    ----------
    source : SourceRaster
        Prepared source raster.
    fx, fy : np.ndarray
        Same-shaped fractional column and row coordinates.

    Returns
    -------
    np.ndarray
        uint8 array shaped fx.shape + (4,). Samples whose row falls outside
        [0, H) or whose column falls outside [-1, W + 1) are transparent
        (all channels zero), as are non-finite coordinates. Columns within
        one pixel of either side wrap modulo W.
    """
    fx = np.asarray(fx, dtype=np.float64)
    fy = np.asarray(fy, dtype=np.float64)
    width, height = source.width, source.height
    output = np.zeros(fx.shape + (4,), dtype=np.uint8)

    with np.errstate(invalid="ignore"):
        valid = np.isfinite(fx) & np.isfinite(fy)
        fy = np.where(valid & (fy < 0.0) & (fy > -EDGE_TOLERANCE), 0.0, fy)
        valid &= (fy >= 0.0) & (fy < height) & (fx >= -1.0) & (fx < width + 1.0)

    if not valid.any():
        return output

    columns = np.mod(fx[valid], width)
    rows = fy[valid]

    samples = np.empty((rows.size, 4), dtype=np.float32)
    for band in range(4):
        samples[:, band] = ndimage.map_coordinates(
            source.padded[:, :, band],
            [rows, columns],
            order=1,
            mode="nearest",
        )

    output[valid] = np.clip(np.rint(samples), 0, 255).astype(np.uint8)
    return output
