#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Input/output handling for the raster reprojection pipeline.

This module decodes raster files into in-memory RGBA arrays, encodes the
converted rasters back to disk, and exports metadata about a conversion.
The reprojection core itself never touches the file system.
"""
import os
import json
import warnings
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np
import rasterio
import yaml
from rasterio.enums import ColorInterp
from rasterio.errors import NotGeoreferencedWarning, RasterioError

from submaptive.core.config import EXPORT_CONFIG
from submaptive.core.logging_config import get_module_logger
from submaptive.core.raster import as_rgba

# Initialize logger
logger = get_module_logger(__name__)

# Output drivers by file extension
DRIVERS: Dict[str, str] = {
    ".png": "PNG",
    ".tif": "GTiff",
    ".tiff": "GTiff",
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
}


def load_raster(path: Union[str, Path]) -> np.ndarray:
    """
    Load a raster file as an RGBA array.

    Parameters
    ----------
    path : str or Path
        Path to an image readable by rasterio (PNG, JPEG, GeoTIFF, ...).

    Returns
    -------
    np.ndarray
        (H, W, 4) uint8 RGBA raster.

    Notes
    -----
    Paletted single-band images are expanded through their color map.
    Georeferencing is ignored: the pixel grid is interpreted through the
    projection chosen by the caller.
    """
    logger.info(f"Loading raster from {path}")

    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", NotGeoreferencedWarning)
            with rasterio.open(path) as src:
                bands = src.read()
                if src.count == 1 and src.colorinterp[0] == ColorInterp.palette:
                    colormap = src.colormap(1)
                    lookup = np.zeros((256, 4), dtype=np.uint8)
                    for index, color in colormap.items():
                        lookup[index] = color
                    image = lookup[bands[0]]
                else:
                    image = np.transpose(bands, (1, 2, 0))
    except RasterioError as e:
        raise RuntimeError(f"Failed to load raster: {path}") from e

    image = as_rgba(image)
    logger.info(f"Loaded raster with shape {image.shape}")
    return image


def save_raster(image: np.ndarray, path: Union[str, Path]) -> None:
    """
    Save an RGBA raster to disk.

    Parameters
    ----------
    image : np.ndarray
        Raster to write; any shape accepted by as_rgba.
    path : str or Path
        Output path. The file extension selects the driver.
    """
    path = Path(path)
    driver = DRIVERS.get(path.suffix.lower())
    if driver is None:
        raise ValueError(f"Unsupported output format: {path.suffix or path.name}")

    image = as_rgba(image)
    height, width = image.shape[:2]

    # JPEG has no alpha channel
    if driver == "JPEG":
        image = image[:, :, :3]

    profile: Dict[str, Any] = {
        "driver": driver,
        "width": width,
        "height": height,
        "count": image.shape[2],
        "dtype": "uint8",
    }
    if driver == "GTiff":
        profile.update(photometric="RGB", alpha="YES", compress=EXPORT_CONFIG.get("compress", "deflate"))

    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)

    logger.info(f"Saving {width}x{height} raster to {path}")
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", NotGeoreferencedWarning)
            with rasterio.open(path, "w", **profile) as dst:
                dst.write(np.transpose(image, (2, 0, 1)))
    except RasterioError as e:
        raise RuntimeError(f"Failed to save raster: {path}") from e


def save_conversion_metadata(
    metadata: Dict[str, Any],
    output_path: Union[str, Path],
    format: Optional[str] = None
) -> None:
    """
    Save metadata about a conversion.

    Parameters
    ----------
    metadata : dict
        Metadata produced by Map.describe().
    output_path : str or Path
        Path to the metadata file.
    format : str, optional
        'json' or 'yaml'. If None, uses the format from config.py.
    """
    format = format or EXPORT_CONFIG.get("metadata_format", "json")

    document = {
        "timestamp": datetime.now().isoformat(),
        **metadata,
    }

    os.makedirs(os.path.dirname(os.path.abspath(output_path)), exist_ok=True)

    if format.lower() == 'json':
        with open(output_path, 'w') as f:
            json.dump(document, f, indent=2)
    elif format.lower() == 'yaml':
        with open(output_path, 'w') as f:
            yaml.dump(document, f, default_flow_style=False)
    else:
        raise ValueError(f"Unsupported format: {format}")

    logger.info(f"Saved metadata to {output_path}")
