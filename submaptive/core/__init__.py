#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Core functionality for raster reprojection.

This module contains the geographic value types, error types, raster
handling, configuration management, and logging setup.
"""
