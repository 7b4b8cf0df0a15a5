#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
In-memory RGBA raster handling.

Rasters are numpy arrays shaped (height, width, 4) with uint8 channels and
straight (non-premultiplied) alpha.
"""
import numpy as np

from submaptive.core.exceptions import InvalidParameterError

OPAQUE = 255
TRANSPARENT = np.zeros(4, dtype=np.uint8)


def as_rgba(image: np.ndarray) -> np.ndarray:
    """
    Normalise an image array to an RGBA uint8 raster.

    Parameters
    ----------
    image : np.ndarray
        Array shaped (H, W) grey, (H, W, 2) grey + alpha, (H, W, 3) RGB
        or (H, W, 4) RGBA. Float arrays are expected in [0, 1]; integer
        arrays wider than 8 bits are scaled down from their dtype's range.

    Returns
    -------
    np.ndarray
        Contiguous (H, W, 4) uint8 array. RGBA uint8 input is returned
        as is, without copying.
    """
    image = np.asarray(image)

    if image.ndim == 2:
        image = image[:, :, np.newaxis]
    if image.ndim != 3 or image.shape[2] not in (1, 2, 3, 4):
        raise InvalidParameterError(f"Unsupported raster shape: {image.shape}")
    if image.shape[0] == 0 or image.shape[1] == 0:
        raise InvalidParameterError(f"Raster must not be empty, got shape {image.shape}")

    # Wider integer samples are rescaled from their full range
    if image.dtype == np.bool_:
        image = image.astype(np.float64)
    elif np.issubdtype(image.dtype, np.integer) and image.dtype != np.uint8:
        image = image.astype(np.float64) / np.iinfo(image.dtype).max
    if np.issubdtype(image.dtype, np.floating):
        image = np.round(np.clip(image, 0.0, 1.0) * 255.0).astype(np.uint8)
    if image.dtype != np.uint8:
        raise InvalidParameterError(f"Unsupported raster dtype: {image.dtype}")

    bands = image.shape[2]
    if bands == 4:
        return np.ascontiguousarray(image)

    height, width = image.shape[:2]
    rgba = np.empty((height, width, 4), dtype=np.uint8)
    if bands in (1, 2):
        rgba[:, :, :3] = image[:, :, :1]
    else:
        rgba[:, :, :3] = image
    rgba[:, :, 3] = image[:, :, 1] if bands == 2 else OPAQUE
    return rgba

