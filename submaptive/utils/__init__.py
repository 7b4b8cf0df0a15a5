#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Utility modules for raster reprojection.

This package contains general-purpose helpers for timing, chunking and
parallel processing.
"""
