#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Map reprojection engine.

A Map pairs a source raster with the projection its pixels are addressed
under. Converting it to a target projection is lazy; to_image() resamples
every output pixel by chaining

    output pixel -> target planar -> target.invert -> geographic point
                 -> source.project -> source planar -> source pixel

and bilinearly interpolating the source there. Each output pixel depends only
on read-only inputs, so scanline blocks are resampled independently and, for
large rasters, in parallel.
"""
from typing import Any, Dict, Optional, Tuple

import numpy as np

from submaptive.core.config import PARALLEL_PIXEL_THRESHOLD
from submaptive.core.exceptions import InvalidParameterError
from submaptive.core.geometry import Dimensions
from submaptive.core.logging_config import get_module_logger
from submaptive.core.raster import TRANSPARENT, as_rgba
from submaptive.engine.sampling import (
    SourceRaster,
    pixel_to_planar,
    planar_to_pixel,
    sample_bilinear,
)
from submaptive.projections import (
    Projection,
    invert_points,
    project_points,
    projection_kind,
)
from submaptive.utils.utils import parallel_apply, row_chunks, timer

# Initialize logger
logger = get_module_logger(__name__)


def resample_rows(
    rows: slice,
    source: SourceRaster,
    source_projection: Projection,
    target_projection: Projection,
    dimensions: Dimensions
) -> np.ndarray:
    """
    Resample a block of output scanlines.

    Parameters
    ----------
    rows : slice
        Output rows to compute, with explicit start and stop.
    source : SourceRaster
        Prepared source raster.
    source_projection : Projection
        Projection the source pixels are addressed under.
    target_projection : Projection
        Projection of the output raster.
    dimensions : Dimensions
        Output raster size, normally target_projection.dimensions().

    Returns
    -------
    np.ndarray
        (rows.stop - rows.start, dimensions.width, 4) uint8 block.
    """
    ys, xs = np.mgrid[rows.start:rows.stop, 0:dimensions.width].astype(np.float64)

    with np.errstate(all="ignore"):
        planar_x, planar_y = pixel_to_planar(
            xs, ys, target_projection.bounds(), dimensions.width, dimensions.height
        )
        latitude, longitude = invert_points(target_projection, planar_x, planar_y)
        source_x, source_y = project_points(source_projection, latitude, longitude)
        fx, fy = planar_to_pixel(
            source_x, source_y, source_projection.bounds(), source.width, source.height
        )

    return sample_bilinear(source, fx, fy)


def resample_pixel(
    x: float,
    y: float,
    image,
    source_projection: Projection,
    target_projection: Projection
) -> np.ndarray:
    """
    Compute the color of a single output pixel.

    Scalar counterpart of resample_rows going through the projections'
    ``invert`` and ``project`` methods.

    Parameters
    ----------
    x, y : float
        Output pixel column and row.
    image : np.ndarray or SourceRaster
        Source raster.
    source_projection, target_projection : Projection
        Projections of the source and output rasters.

    Returns
    -------
    np.ndarray
        RGBA uint8 color; transparent when the sample is undefined.
    """
    source = image if isinstance(image, SourceRaster) else SourceRaster.from_image(image)
    dimensions = target_projection.dimensions()

    planar = pixel_to_planar(
        float(x), float(y), target_projection.bounds(), dimensions.width, dimensions.height
    )
    try:
        point = target_projection.invert(planar)
        source_x, source_y = source_projection.project(point)
    # UndefinedSampleError is an ArithmeticError
    except (ArithmeticError, InvalidParameterError) as e:
        logger.debug(f"Undefined sample at pixel ({x}, {y}): {e}")
        return TRANSPARENT.copy()

    fx, fy = planar_to_pixel(
        source_x, source_y, source_projection.bounds(), source.width, source.height
    )
    return sample_bilinear(source, np.array([fx]), np.array([fy]))[0]


class Map:
    """
    Raster bound to the projection its pixels are addressed under.

    Parameters
    ----------
    image : np.ndarray
        Source raster; any shape accepted by as_rgba.
    projection : Projection
        Projection of the source raster.
    target : Projection, optional
        Projection to resample into. Normally set through convert_to().

    Examples
    --------
    >>> source = Equirectangular()
    >>> target = Equirectangular(central_long=90.0)
    >>> output = Map(image, source).convert_to(target).to_image()
    """

    def __init__(self, image: np.ndarray, projection: Projection, target: Optional[Projection] = None):
        for role, value in (("projection", projection), ("target", target)):
            if value is None and role == "target":
                continue
            if not isinstance(value, Projection):
                raise InvalidParameterError(
                    f"Map {role} must implement the projection contract, got {type(value).__name__}"
                )

        image = as_rgba(image).view()
        image.flags.writeable = False

        self.image = image
        self.projection = projection
        self.target = target

    def __repr__(self):
        height, width = self.image.shape[:2]
        return f"Map(size={width}x{height}, projection={self.projection!r}, target={self.target!r})"

    def convert_to(self, target: Projection) -> "Map":
        """Bind the source raster to a target projection; resampling is deferred."""
        return Map(self.image, self.projection, target)

    @property
    def output_dimensions(self) -> Dimensions:
        if self.target is None:
            height, width = self.image.shape[:2]
            return Dimensions(width, height)
        return self.target.dimensions()

    @timer
    def to_image(self, n_jobs: Optional[int] = None) -> np.ndarray:
        """
        Resample the source raster into the target projection.

        Parameters
        ----------
        n_jobs : int, optional
            Number of parallel jobs. If None, uses N_JOBS from config.
            Rasters of at most PARALLEL_PIXEL_THRESHOLD pixels are always
            resampled sequentially.

        Returns
        -------
        np.ndarray
            (H, W, 4) uint8 raster sized by target.dimensions(). Pixels
            without a valid source sample are fully transparent. A map that
            was never converted returns a copy of its source raster.
        """
        if self.target is None:
            return np.array(self.image)

        dimensions = self.target.dimensions()
        source = SourceRaster.from_image(self.image)
        chunks = row_chunks(dimensions.height)

        if dimensions.pixel_count <= PARALLEL_PIXEL_THRESHOLD:
            n_jobs = 1

        logger.info(
            f"Resampling {source.width}x{source.height} raster into "
            f"{dimensions.width}x{dimensions.height} ({len(chunks)} blocks)"
        )
        blocks = parallel_apply(
            resample_rows,
            chunks,
            n_jobs=n_jobs,
            source=source,
            source_projection=self.projection,
            target_projection=self.target,
            dimensions=dimensions,
        )
        output = np.concatenate(blocks, axis=0)

        transparent = int(np.count_nonzero(output[:, :, 3] == 0))
        logger.info(
            f"Resampled {dimensions.pixel_count} pixels, {transparent} transparent "
            f"({transparent / dimensions.pixel_count * 100:.2f}%)"
        )
        return output

    def describe(self, output: Optional[np.ndarray] = None) -> Dict[str, Any]:
        """
        Summarize the conversion for metadata export.

        Parameters
        ----------
        output : np.ndarray, optional
            Result of to_image(); adds coverage statistics when given.

        Returns
        -------
        dict
            JSON/YAML serializable description.
        """
        height, width = self.image.shape[:2]
        description: Dict[str, Any] = {
            "source": {
                "size": [width, height],
                "projection": _describe_projection(self.projection),
            },
            "target": {
                "size": list(_size(self.output_dimensions)),
                "projection": _describe_projection(self.target) if self.target is not None else None,
            },
        }

        if output is not None:
            alpha = output[:, :, 3]
            description["coverage"] = {
                "pixels": int(alpha.size),
                "transparent": int(np.count_nonzero(alpha == 0)),
                "opaque": int(np.count_nonzero(alpha == 255)),
            }
        return description


def _size(dimensions: Dimensions) -> Tuple[int, int]:
    return dimensions.width, dimensions.height


def _describe_projection(projection: Projection) -> Dict[str, Any]:
    try:
        kind = projection_kind(projection).value
    except InvalidParameterError:
        kind = type(projection).__name__

    parameters = getattr(projection, "parameters", None)
    return {
        "kind": kind,
        "parameters": parameters() if callable(parameters) else {},
        "dimensions": list(_size(projection.dimensions())),
    }
