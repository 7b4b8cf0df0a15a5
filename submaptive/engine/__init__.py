#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Reprojection engine.

This package contains the pixel/planar coordinate mapping, bilinear
sampling, and the Map type that chains two projections to resample a raster.
"""
from submaptive.engine.map import Map, resample_pixel, resample_rows

__all__ = ["Map", "resample_pixel", "resample_rows"]
