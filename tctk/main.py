#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ******************************************************************************
# Project: Traffic Color ToolKit (TCTK)
# Author: Eric Robeck <robeckgeo@gmail.com>
#
# Copyright (c) 2025, Eric Robeck
# Licensed under the MIT License
# ******************************************************************************

"""
Command-line interface for the Traffic Color ToolKit (TCTK).

This script provides the main entry point for the `tctk` command,
parsing user arguments and dispatching them to the appropriate tool.
Defaults for the map view and endpoints come from config.toml.
"""
import argparse
import logging
import sys
from pathlib import Path
from tctk.utils.config_loader import config
from tctk.utils.log_helpers import resolve_level, setup_logger, shutdown_logger
from tctk.utils.script_arguments import RangeArguments, RasterScanArguments, VectorScanArguments
from tctk.utils.traffic_constants import BatchStatus

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_TRAFFIC_COLORS = 2
EXIT_NO_DATA = 3

def str2bool(v):
    if isinstance(v, bool):
        return v
    if v.lower() in ('yes', 'true', 't', 'y', '1'):
        return True
    elif v.lower() in ('no', 'false', 'f', 'n', '0'):
        return False
    else:
        raise argparse.ArgumentTypeError('Boolean value expected.')

def exit_code_for(status: BatchStatus, strict: bool = False) -> int:
    """Map a batch status to the process exit code. A batch where every tile failed is always an error."""
    if status is BatchStatus.NO_DATA:
        return EXIT_NO_DATA
    if strict and status is not BatchStatus.COLORS_FOUND:
        return EXIT_NO_TRAFFIC_COLORS
    return EXIT_OK

def positive_int(value: str) -> int:
    """Validate that the value is a positive integer."""
    try:
        ivalue = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected a positive integer, got '{value}'")
    if ivalue <= 0:
        raise argparse.ArgumentTypeError(f"Expected a positive integer, got '{ivalue}'")
    return ivalue

def add_view_args(p):
    """Map view and viewport options shared by every tool."""
    p.add_argument('--lat', type=float, default=config.get('target.lat'), dest='lat', help='Latitude of the map center.')
    p.add_argument('--lon', type=float, default=config.get('target.lon'), dest='lon', help='Longitude of the map center.')
    p.add_argument('-z', '--zoom', type=float, default=config.get('target.zoom'), dest='zoom', help='Display zoom (may be fractional).')
    p.add_argument('--tile-zoom', type=int, default=None, dest='tile_zoom', help='Integer zoom of the tiles to fetch. Default: floor of --zoom.')
    p.add_argument('--width', type=positive_int, default=config.get('viewport.width'), dest='width', help='Viewport width in pixels.')
    p.add_argument('--height', type=positive_int, default=config.get('viewport.height'), dest='height', help='Viewport height in pixels.')
    p.add_argument('-t', '--tile-size', type=positive_int, default=config.get('tiles.size'), dest='tile_size', help='Tile size in pixels.')
    p.add_argument('-o', '--output', type=Path, default=None, dest='output_path', help='Write the report to this file instead of stdout.')
    p.add_argument('--log-file', type=Path, dest='log_file', help='Path to a log file for debugging.')
    p.add_argument('-v', '--verbose', action='store_true', dest='verbose', help='Enable verbose logging.')

def add_scan_args(p):
    p.add_argument('-f', '--report-format', type=str.lower, default='json', choices=['json', 'md'], dest='report_format', help='Output format for the report.')
    p.add_argument('--timeout', type=float, default=config.get('http.timeout'), dest='timeout', help='HTTP timeout per tile, in seconds.')

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='TCTK',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    subparsers = parser.add_subparsers(dest='tool', help='Available tools')
    subparsers.required = True

    # --- Tile Range Tool ---
    range_parser = subparsers.add_parser(
        'range',
        help='List the tiles covering a map view.',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    add_view_args(range_parser)

    # --- Vector Scan Tool ---
    vector_parser = subparsers.add_parser(
        'vector',
        help='Count traffic color values in the vector tiles covering a map view.',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    add_view_args(vector_parser)
    add_scan_args(vector_parser)
    vector_parser.add_argument('-u', '--url-template', type=str, default=config.get('vector.url_template') or None, dest='url_template', help='Vector tile endpoint with {z}/{x}/{y} placeholders.')

    # --- Raster Scan Tool ---
    raster_parser = subparsers.add_parser(
        'raster',
        help='Classify traffic colors in rendered raster tiles.',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    add_view_args(raster_parser)
    add_scan_args(raster_parser)
    source_group = raster_parser.add_mutually_exclusive_group()
    source_group.add_argument('-i', '--input', type=Path, dest='input_path', help='A tile image or a directory of tile images.')
    source_group.add_argument('-u', '--url-template', type=str, default=config.get('raster.url_template') or None, dest='url_template', help='Raster tile endpoint with {z}/{x}/{y} placeholders.')
    raster_parser.add_argument('--min-tile-size', type=int, default=config.get('tiles.min_tile_size'), dest='min_tile_size', help='Skip tile images smaller than this many pixels on a side.')
    raster_parser.add_argument('--strict', type=str2bool, default=True, dest='strict', help='Exit with status 2 when no traffic colors are found.')

    return parser

def main():
    """
    Main function to parse arguments and call the appropriate tool.
    """
    parser = build_parser()
    args = parser.parse_args()
    tool = args.tool
    args_dict = vars(args)
    args_dict.pop('tool', None)

    # A raster scan from files ignores the configured raster endpoint
    if tool == 'raster' and args_dict.get('input_path') is not None:
        args_dict['url_template'] = None

    # --- Logger Setup ---
    log_level = logging.DEBUG if args.verbose else resolve_level(config.get('logging.level'))
    log_file = str(args.log_file) if args.log_file else None
    logger = setup_logger(log_file=log_file, level=log_level)

    exit_code = EXIT_OK
    try:
        if tool == 'range':
            from tctk.tools.tile_range import describe_tile_range
            script_args = RangeArguments(**args_dict)
            describe_tile_range(script_args)
        elif tool == 'vector':
            from tctk.tools.scan_vector_tiles import scan_vector_tiles
            script_args = VectorScanArguments(**args_dict)
            _, status = scan_vector_tiles(script_args)
            exit_code = exit_code_for(status)
        elif tool == 'raster':
            from tctk.tools.scan_raster_tiles import scan_raster_tiles
            if args.input_path:
                args_dict['input_path'] = args.input_path.resolve()
            script_args = RasterScanArguments(**args_dict)
            _, status = scan_raster_tiles(script_args)
            exit_code = exit_code_for(status, script_args.strict)
    except Exception as e:
        logger.error(f"An unexpected error occurred: {e}", exc_info=args.verbose)
        exit_code = EXIT_ERROR
    finally:
        shutdown_logger(logger)

    if exit_code != EXIT_OK:
        sys.exit(exit_code)

if __name__ == "__main__":
    main()
