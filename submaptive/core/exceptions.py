#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Error types raised by the reprojection pipeline.
"""


class InvalidParameterError(ValueError):
    """A projection, point or raster parameter lies outside its documented domain."""


class UndefinedSampleError(ArithmeticError):
    """A forward or inverse projection is undefined at the requested location.

    Raised by scalar projection evaluations only. The resampler turns it into
    a transparent output pixel and never lets it escape a conversion.
    """
