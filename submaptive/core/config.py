#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration settings for the raster reprojection pipeline.

This module centralizes all configuration parameters used across the
projection and resampling modules, making it easier to modify settings in
one place.
"""
from typing import Dict, Any
from pathlib import Path

# General configuration
N_JOBS: int = -1                        # Number of parallel jobs (-1 = all cores)
CHUNK_ROWS: int = 64                    # Output scanlines per parallel task
PARALLEL_PIXEL_THRESHOLD: int = 100_000  # Rasters above this size are resampled in parallel

# Sampling configuration
EDGE_TOLERANCE: float = 1e-9     # Fractional pixel slack absorbed at the raster edges
MAX_TRUE_SCALE_LAT: float = 89.9  # Clamping limit for the true scale latitude

# Path configuration
DEFAULT_OUTPUT_DIR: Path = Path.cwd() / "output"

# Projection kind used for either end of a conversion when none is given
DEFAULT_PROJECTION_KIND: str = "equirectangular"

# Export configuration
EXPORT_CONFIG: Dict[str, Any] = {
    "metadata_format": "json",   # Options: 'json', 'yaml'
    "default_suffix": ".png",    # Used when no output path is given
    "compress": "deflate",       # GeoTIFF compression
}

# Performance tuning
PERFORMANCE_CONFIG: Dict[str, Any] = {
    "use_parallel": True,
    "prefer": "threads",  # joblib backend: "threads" or "processes"
    "show_progress": False,
}

# Logging configuration
LOGGING_CONFIG: Dict[str, Any] = {
    "level": "INFO",  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    "log_to_file": False,
    "log_file": DEFAULT_OUTPUT_DIR / "submaptive.log",
    "log_format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}
