#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Main entry point for the raster reprojection pipeline.

This script loads a raster, reprojects it from a source projection into a
target projection, and writes the result to disk.
"""
import sys
import time
import argparse
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from submaptive import __version__
from submaptive.core.config import (
    DEFAULT_OUTPUT_DIR, DEFAULT_PROJECTION_KIND, EXPORT_CONFIG, N_JOBS
)
from submaptive.core.exceptions import InvalidParameterError
from submaptive.core.logging_config import setup_logging, get_module_logger
from submaptive.projections import ProjectionKind, build_projection

# Initialize logger
logger = get_module_logger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Parameters
    ----------
    argv : list of str, optional
        Arguments to parse, by default sys.argv[1:].

    Returns
    -------
    argparse.Namespace
        Parsed command line arguments.
    """
    parser = argparse.ArgumentParser(
        description="Reproject raster maps between cartographic projections."
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"Submaptive v{__version__}"
    )

    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    # Reproject command
    reproject_parser = subparsers.add_parser('reproject', help='Reproject a raster file')

    reproject_parser.add_argument(
        "--input", "-i",
        required=True,
        help="Path to input raster (PNG, JPEG, GeoTIFF)"
    )

    reproject_parser.add_argument(
        "--output", "-o",
        help="Path to output raster (default: <output dir>/<input_basename>_reprojected.png)"
    )

    reproject_parser.add_argument(
        "--config", "-c",
        help="Path to YAML configuration file with 'source', 'target' and 'n_jobs' keys"
    )

    kinds = [kind.value for kind in ProjectionKind.all()]
    reproject_parser.add_argument(
        "--source", "-s",
        choices=kinds,
        help=f"Source projection kind (default: {DEFAULT_PROJECTION_KIND})"
    )

    reproject_parser.add_argument(
        "--target", "-t",
        choices=kinds,
        help=f"Target projection kind (default: {DEFAULT_PROJECTION_KIND})"
    )

    reproject_parser.add_argument(
        "--source-param",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Source projection parameter, e.g. central_long=0 (repeatable)"
    )

    reproject_parser.add_argument(
        "--target-param",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Target projection parameter, e.g. central_long=90 (repeatable)"
    )

    reproject_parser.add_argument(
        "--clamp",
        action="store_true",
        help="Clamp projection parameters into their domain instead of failing"
    )

    reproject_parser.add_argument(
        "--n-jobs", "-j",
        type=int,
        help=f"Number of parallel jobs (default: {N_JOBS})"
    )

    reproject_parser.add_argument(
        "--no-parallel",
        action="store_true",
        help="Disable parallel processing"
    )

    reproject_parser.add_argument(
        "--save-metadata", "-m",
        action="store_true",
        help="Save metadata about the conversion next to the output raster"
    )

    reproject_parser.add_argument(
        "--log-level", "-l",
        choices=LOG_LEVELS,
        default="INFO",
        help="Logging level (default: INFO)"
    )

    # List projections command
    projections_parser = subparsers.add_parser('projections', help='List supported projections')

    projections_parser.add_argument(
        "--log-level", "-l",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level (default: WARNING)"
    )

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        parser.exit(2)
    return args


def parse_parameters(pairs: List[str]) -> Dict[str, str]:
    """
    Parse NAME=VALUE pairs from the command line.

    Raises
    ------
    InvalidParameterError
        If a pair has no '=' or an empty name.
    """
    params = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name.strip():
            raise InvalidParameterError(f"Expected NAME=VALUE, got '{pair}'")
        params[name.strip()] = value.strip()
    return params


def load_config(path: Optional[str]) -> Dict[str, Any]:
    """Load a YAML configuration file; an empty dict when no path is given."""
    if not path:
        return {}

    with open(path) as f:
        config = yaml.safe_load(f) or {}
    if not isinstance(config, dict):
        raise InvalidParameterError(f"Configuration file {path} must contain a mapping")
    return config


def resolve_projection(config: Dict[str, Any], role: str, kind: Optional[str],
                       params: Dict[str, str], clamp: bool):
    """
    Merge file configuration and command line arguments into a projection.

    Command line values override the configuration file, which overrides the
    default projection kind.
    """
    section = config.get(role) or {}
    if not isinstance(section, dict):
        raise InvalidParameterError(f"Configuration section '{role}' must be a mapping")
    section = dict(section)
    file_kind = section.pop("kind", None)
    kind = kind or file_kind or DEFAULT_PROJECTION_KIND
    section.update(params)

    projection = build_projection(kind, section, clamp=clamp)
    logger.info(f"{role.capitalize()} projection: {projection}")
    return projection


def reproject(args: argparse.Namespace) -> int:
    """
    Reproject a raster file.

    Parameters
    ----------
    args : argparse.Namespace
        Command line arguments.

    Returns
    -------
    int
        Exit code.
    """
    from submaptive.core.io import load_raster, save_raster, save_conversion_metadata
    from submaptive.engine.map import Map

    logger.info(f"Starting reprojection for {args.input}")

    if not args.output:
        input_path = Path(args.input)
        suffix = EXPORT_CONFIG.get("default_suffix", ".png")
        args.output = str(DEFAULT_OUTPUT_DIR / f"{input_path.stem}_reprojected{suffix}")

    start_time = time.time()

    try:
        config = load_config(args.config)
        source = resolve_projection(config, "source", args.source,
                                    parse_parameters(args.source_param), args.clamp)
        target = resolve_projection(config, "target", args.target,
                                    parse_parameters(args.target_param), args.clamp)
    except (InvalidParameterError, OSError, yaml.YAMLError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    n_jobs = args.n_jobs if args.n_jobs is not None else config.get("n_jobs")
    if args.no_parallel:
        n_jobs = 1

    try:
        image = load_raster(args.input)
    except (RuntimeError, InvalidParameterError) as e:
        logger.error(str(e))
        return 1

    source_map = Map(image, source).convert_to(target)
    output = source_map.to_image(n_jobs=n_jobs)

    try:
        save_raster(output, args.output)
        if args.save_metadata:
            format = EXPORT_CONFIG.get("metadata_format", "json")
            metadata_path = Path(args.output).with_suffix(f".{format}")
            save_conversion_metadata(source_map.describe(output), metadata_path, format)
    except (RuntimeError, ValueError) as e:
        logger.error(str(e))
        return 1

    elapsed = time.time() - start_time
    logger.info(f"Reprojection completed in {elapsed:.2f} seconds: {args.output}")
    return 0


def list_projections(args: argparse.Namespace) -> int:
    """Print every projection kind with its default parameters."""
    for kind in ProjectionKind.all():
        defaults = kind.default_projection().parameters()
        params = ", ".join(f"{name}={value:g}" for name, value in defaults.items())
        print(f"{kind.value:<20} {kind}: {params}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function to run the reprojection pipeline.
    """
    args = parse_arguments(argv)

    setup_logging(log_level=args.log_level)

    if args.command == 'reproject':
        return reproject(args)
    elif args.command == 'projections':
        return list_projections(args)
    else:
        logger.error(f"Unknown command: {args.command}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
