#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Test suite for raster and metadata input/output.
"""

import json
import os
import tempfile
import unittest
import warnings
import numpy as np
import rasterio
import yaml
from rasterio.errors import NotGeoreferencedWarning

from submaptive.core.io import load_raster, save_conversion_metadata, save_raster


class TestRasterIO(unittest.TestCase):
    """Test raster encoding and decoding."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.image = np.zeros((6, 8, 4), dtype=np.uint8)
        self.image[..., 0] = np.arange(8)[np.newaxis, :] * 30
        self.image[..., 1] = np.arange(6)[:, np.newaxis] * 40
        self.image[..., 3] = 255
        self.image[0, 0, 3] = 0

    def tearDown(self):
        self.tmpdir.cleanup()

    def path(self, name):
        return os.path.join(self.tmpdir.name, name)

    def test_png_preserves_pixels(self):
        path = self.path("map.png")
        save_raster(self.image, path)
        np.testing.assert_array_equal(load_raster(path), self.image)

    def test_geotiff_preserves_pixels(self):
        path = self.path("nested/map.tif")
        save_raster(self.image, path)
        np.testing.assert_array_equal(load_raster(path), self.image)

    def test_rgb_input_saved_opaque(self):
        path = self.path("rgb.png")
        save_raster(self.image[..., :3], path)
        loaded = load_raster(path)
        self.assertTrue(np.all(loaded[..., 3] == 255))
        np.testing.assert_array_equal(loaded[..., :3], self.image[..., :3])

    def test_sixteen_bit_raster_rescaled(self):
        path = self.path("elevation.png")
        grey = np.full((4, 5), 32768, dtype=np.uint16)
        grey[0, 0] = 65535
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", NotGeoreferencedWarning)
            with rasterio.open(path, "w", driver="PNG", width=5, height=4,
                               count=1, dtype="uint16") as dst:
                dst.write(grey, 1)

        loaded = load_raster(path)
        self.assertEqual(loaded.dtype, np.uint8)
        np.testing.assert_array_equal(loaded[0, 0], [255, 255, 255, 255])
        np.testing.assert_array_equal(loaded[1, 1], [128, 128, 128, 255])

    def test_unsupported_extension(self):
        with self.assertRaises(ValueError):
            save_raster(self.image, self.path("map.bmpx"))

    def test_missing_file(self):
        with self.assertRaises(RuntimeError):
            load_raster(self.path("missing.png"))


class TestMetadataExport(unittest.TestCase):
    """Test conversion metadata export."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.metadata = {
            "source": {"size": [360, 180]},
            "target": {"size": [312, 180], "projection": {"kind": "equirectangular"}},
        }

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_json(self):
        path = os.path.join(self.tmpdir.name, "out", "meta.json")
        save_conversion_metadata(self.metadata, path, "json")
        with open(path) as f:
            document = json.load(f)
        self.assertIn("timestamp", document)
        self.assertEqual(document["target"]["size"], [312, 180])

    def test_yaml(self):
        path = os.path.join(self.tmpdir.name, "meta.yaml")
        save_conversion_metadata(self.metadata, path, "yaml")
        with open(path) as f:
            document = yaml.safe_load(f)
        self.assertEqual(document["source"]["size"], [360, 180])

    def test_unknown_format(self):
        with self.assertRaises(ValueError):
            save_conversion_metadata(self.metadata, os.path.join(self.tmpdir.name, "meta.xml"), "xml")


if __name__ == '__main__':
    unittest.main()
