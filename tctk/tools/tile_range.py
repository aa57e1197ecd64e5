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
Tile Range Tool for TCTK.

This module powers the 'range' command: it reports the tiles covering a map
view without fetching anything, which is handy for checking a target before
running a scan.
"""
import logging
from typing import Any, Dict

from tctk.utils.report_formatters import format_json, write_report
from tctk.utils.script_arguments import RangeArguments
from tctk.utils.tile_geometry import lon_lat_to_pixel, tile_range_for_viewport

logger = logging.getLogger('tile_range')


def describe_tile_range(args: RangeArguments) -> Dict[str, Any]:
    """
    Compute and write the tile range covering the map view.

    Returns:
        Dict with the view, center pixel, tile zoom, range bounds and tile ids.
    """
    center_x, center_y = lon_lat_to_pixel(args.lon, args.lat, args.zoom, args.tile_size)
    tile_range = tile_range_for_viewport(args.view, args.viewport, args.tile_size)
    tile_ids = [coord.tile_id for coord in tile_range.tiles(args.tile_zoom)]
    logger.info(f"{len(tile_ids)} tile(s) cover a {args.width}x{args.height} viewport "
                f"at {args.lat}, {args.lon} zoom {args.zoom}")

    result = {
        'view': {'lat': args.lat, 'lon': args.lon, 'zoom': args.zoom},
        'viewport': {'width': args.width, 'height': args.height},
        'tileSize': args.tile_size,
        'centerPixel': {'x': center_x, 'y': center_y},
        'tileZoom': args.tile_zoom,
        'range': tile_range.to_dict(),
        'tileCount': tile_range.tile_count,
        'tiles': tile_ids,
    }
    write_report(format_json(result), args.output_path)
    return result
