#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Test suite for the geographic value types and raster normalisation.
"""

import unittest
import numpy as np

from submaptive.core.exceptions import InvalidParameterError
from submaptive.core.geometry import (
    Dimensions,
    PlanarBounds,
    Point,
    clamp_latitude,
    wrap_longitude,
)
from submaptive.core.raster import as_rgba


class TestLongitudeHelpers(unittest.TestCase):
    """Test longitude wrapping and latitude clamping."""

    def test_wrap_scalar(self):
        self.assertEqual(wrap_longitude(0.0), 0.0)
        self.assertEqual(wrap_longitude(190.0), -170.0)
        self.assertEqual(wrap_longitude(-190.0), 170.0)
        self.assertEqual(wrap_longitude(720.0 + 45.0), 45.0)

    def test_antimeridian_is_single_seam(self):
        self.assertEqual(wrap_longitude(180.0), -180.0)
        self.assertEqual(wrap_longitude(-180.0), -180.0)

    def test_wrap_array(self):
        wrapped = wrap_longitude(np.array([-540.0, -90.0, 270.0, np.nan]))
        np.testing.assert_array_equal(wrapped[:3], [-180.0, -90.0, -90.0])
        self.assertTrue(np.isnan(wrapped[3]))

    def test_clamp_latitude(self):
        self.assertEqual(clamp_latitude(95.0), 90.0)
        self.assertEqual(clamp_latitude(-100.0), -90.0)
        self.assertEqual(clamp_latitude(12.5), 12.5)
        np.testing.assert_array_equal(clamp_latitude(np.array([-91.0, 0.0, 91.0])), [-90.0, 0.0, 90.0])


class TestPoint(unittest.TestCase):
    """Test the Point value type."""

    def test_equality_and_unpacking(self):
        point = Point(10.0, 20.0)
        self.assertEqual(point, Point(10.0, 20.0))
        latitude, longitude = point
        self.assertEqual((latitude, longitude), (10.0, 20.0))

    def test_out_of_range_rejected(self):
        with self.assertRaises(InvalidParameterError):
            Point(90.5, 0.0)
        with self.assertRaises(InvalidParameterError):
            Point(0.0, -181.0)
        with self.assertRaises(InvalidParameterError):
            Point(float("nan"), 0.0)

    def test_from_degrees_normalises(self):
        self.assertEqual(Point.from_degrees(100.0, 200.0), Point(90.0, -160.0))

    def test_immutable(self):
        point = Point(0.0, 0.0)
        with self.assertRaises(AttributeError):
            point.latitude = 5.0


class TestDimensionsAndBounds(unittest.TestCase):
    """Test Dimensions and PlanarBounds."""

    def test_dimensions_must_be_positive(self):
        with self.assertRaises(InvalidParameterError):
            Dimensions(0, 10)
        with self.assertRaises(InvalidParameterError):
            Dimensions(10, -1)
        with self.assertRaises(InvalidParameterError):
            Dimensions(10.5, 3)

    def test_whole_float_dimensions_stored_as_int(self):
        dimensions = Dimensions(3.0, 2)
        self.assertEqual(dimensions.width, 3)
        self.assertIsInstance(dimensions.width, int)

    def test_dimensions_shape(self):
        dimensions = Dimensions(360, 180)
        self.assertEqual(dimensions.shape, (180, 360))
        self.assertEqual(dimensions.pixel_count, 64800)

    def test_bounds_to_dimensions(self):
        bounds = PlanarBounds(-155.88, -90.0, 155.88, 90.0)
        self.assertAlmostEqual(bounds.width, 311.76)
        self.assertEqual(bounds.to_dimensions(), Dimensions(312, 180))

    def test_tiny_bounds_keep_one_pixel(self):
        self.assertEqual(PlanarBounds(-0.1, -90.0, 0.1, 90.0).to_dimensions(), Dimensions(1, 180))

    def test_degenerate_bounds_rejected(self):
        with self.assertRaises(InvalidParameterError):
            PlanarBounds(0.0, 0.0, 0.0, 1.0)


class TestRaster(unittest.TestCase):
    """Test promotion of image arrays to RGBA."""

    def test_grey_promoted(self):
        grey = np.array([[0, 128], [255, 7]], dtype=np.uint8)
        rgba = as_rgba(grey)
        self.assertEqual(rgba.shape, (2, 2, 4))
        np.testing.assert_array_equal(rgba[1, 0], [255, 255, 255, 255])
        np.testing.assert_array_equal(rgba[0, 1], [128, 128, 128, 255])

    def test_rgb_promoted(self):
        rgb = np.zeros((3, 4, 3), dtype=np.uint8)
        rgb[..., 0] = 200
        rgba = as_rgba(rgb)
        np.testing.assert_array_equal(rgba[2, 3], [200, 0, 0, 255])

    def test_grey_alpha(self):
        grey_alpha = np.zeros((1, 1, 2), dtype=np.uint8)
        grey_alpha[0, 0] = [50, 60]
        np.testing.assert_array_equal(as_rgba(grey_alpha)[0, 0], [50, 50, 50, 60])

    def test_float_scaled(self):
        rgba = as_rgba(np.ones((2, 2, 4), dtype=np.float64))
        self.assertEqual(rgba.dtype, np.uint8)
        self.assertTrue(np.all(rgba == 255))

    def test_rgba_not_copied(self):
        image = np.zeros((2, 2, 4), dtype=np.uint8)
        self.assertIs(as_rgba(image), image)

    def test_wide_integers_rescaled(self):
        grey = np.array([[0, 32768], [65535, 257]], dtype=np.uint16)
        rgba = as_rgba(grey)
        self.assertEqual(rgba.dtype, np.uint8)
        np.testing.assert_array_equal(rgba[:, :, 0], [[0, 128], [255, 1]])
        self.assertTrue(np.all(rgba[:, :, 3] == 255))

    def test_bad_shapes_rejected(self):
        with self.assertRaises(InvalidParameterError):
            as_rgba(np.zeros((2, 2, 5), dtype=np.uint8))
        with self.assertRaises(InvalidParameterError):
            as_rgba(np.zeros((0, 2, 4), dtype=np.uint8))


if __name__ == '__main__':
    unittest.main()
