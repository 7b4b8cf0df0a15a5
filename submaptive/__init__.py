#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Submaptive raster reprojection package.

Converts raster maps between cartographic projections by resampling every
output pixel from the geographic location the source projection maps there.
"""

__version__ = "0.1.0"
__author__ = "Submaptive Project Team"
__email__ = "user@example.com"
