#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Test suite for the command line entry point.
"""

import json
import os
import tempfile
import unittest
import warnings
from contextlib import redirect_stdout
from io import StringIO

import numpy as np
import rasterio
import yaml
from rasterio.errors import NotGeoreferencedWarning

from submaptive.cli import main, parse_parameters
from submaptive.core.exceptions import InvalidParameterError
from submaptive.core.io import load_raster, save_raster


class TestReprojectCommand(unittest.TestCase):
    """Test the reproject command end to end."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.input = os.path.join(self.tmpdir.name, "world.png")
        self.output = os.path.join(self.tmpdir.name, "out", "world_90.png")

        image = np.zeros((18, 36, 4), dtype=np.uint8)
        image[..., 3] = 255
        image[9, 18] = [255, 0, 0, 255]
        save_raster(image, self.input)

    def tearDown(self):
        self.tmpdir.cleanup()

    def run_cli(self, *extra):
        return main(["reproject", "-i", self.input, "-o", self.output,
                     "--no-parallel", "-l", "ERROR", *extra])

    def test_reproject(self):
        self.assertEqual(self.run_cli("--target-param", "central_long=90"), 0)
        output = load_raster(self.output)
        self.assertEqual(output.shape, (180, 360, 4))
        # lon 0 moves from the center to a quarter of the width
        self.assertEqual(output[90, 90, 0], 255)
        self.assertEqual(output[90, 180, 0], 0)

    def test_true_scale_changes_width(self):
        self.assertEqual(self.run_cli("--target-param", "true_scale_lat=60"), 0)
        self.assertEqual(load_raster(self.output).shape, (180, 180, 4))

    def test_invalid_parameter_fails(self):
        self.assertEqual(self.run_cli("--target-param", "true_scale_lat=90"), 1)
        self.assertFalse(os.path.exists(self.output))

    def test_clamp_accepts_out_of_range_parameter(self):
        self.assertEqual(self.run_cli("--target-param", "true_scale_lat=90", "--clamp"), 0)
        self.assertEqual(load_raster(self.output).shape, (180, 1, 4))

    def test_unknown_parameter_fails(self):
        self.assertEqual(self.run_cli("--source-param", "zoom=2"), 1)

    def test_missing_input_fails(self):
        self.input = os.path.join(self.tmpdir.name, "missing.png")
        self.assertEqual(self.run_cli(), 1)

    def test_unsupported_band_count_fails(self):
        self.input = os.path.join(self.tmpdir.name, "five.tif")
        bands = np.zeros((5, 4, 8), dtype=np.uint8)
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", NotGeoreferencedWarning)
            with rasterio.open(self.input, "w", driver="GTiff", width=8, height=4,
                               count=5, dtype="uint8") as dst:
                dst.write(bands)

        self.assertEqual(self.run_cli(), 1)
        self.assertFalse(os.path.exists(self.output))

    def test_config_file_and_override(self):
        config_path = os.path.join(self.tmpdir.name, "config.yaml")
        with open(config_path, "w") as f:
            yaml.dump({
                "target": {"kind": "equirectangular", "central_long": 90, "true_scale_lat": 60},
                "n_jobs": 1,
            }, f)

        self.assertEqual(self.run_cli("-c", config_path, "--target-param", "true_scale_lat=0"), 0)
        output = load_raster(self.output)
        self.assertEqual(output.shape, (180, 360, 4))
        self.assertEqual(output[90, 90, 0], 255)

    def test_save_metadata(self):
        self.assertEqual(self.run_cli("--save-metadata"), 0)
        metadata_path = os.path.splitext(self.output)[0] + ".json"
        with open(metadata_path) as f:
            metadata = json.load(f)
        self.assertEqual(metadata["source"]["size"], [36, 18])
        self.assertEqual(metadata["target"]["size"], [360, 180])


class TestProjectionsCommand(unittest.TestCase):
    """Test listing of projection kinds."""

    def test_lists_equirectangular(self):
        buffer = StringIO()
        with redirect_stdout(buffer):
            self.assertEqual(main(["projections"]), 0)
        self.assertIn("equirectangular", buffer.getvalue())
        self.assertIn("central_long=0", buffer.getvalue())


class TestParameterParsing(unittest.TestCase):
    """Test NAME=VALUE parsing."""

    def test_pairs(self):
        self.assertEqual(
            parse_parameters(["central_long=90", " true_scale_lat = 30 "]),
            {"central_long": "90", "true_scale_lat": "30"},
        )

    def test_malformed(self):
        with self.assertRaises(InvalidParameterError):
            parse_parameters(["central_long"])
        with self.assertRaises(InvalidParameterError):
            parse_parameters(["=5"])


if __name__ == '__main__':
    unittest.main()
