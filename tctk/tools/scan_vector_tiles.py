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
Vector Tile Traffic Color Scan for TCTK.

This module powers the 'vector' command. It computes the tiles covering the
configured map view, fetches each tile's Mapbox Vector Tile payload from the
traffic tile endpoint, and counts the `color` property of its features. Tiles
are fetched one at a time; a failed tile is recorded and the scan continues.
"""
import logging
from typing import Any, Dict, Optional, Tuple

from tctk.utils.data_models import TileCoord, VectorTileResult
from tctk.utils.exceptions import TrafficColorError
from tctk.utils.performance_tracker import PerformanceTracker
from tctk.utils.report_formatters import (
    assess_batch,
    build_vector_summary,
    describe_status,
    format_json,
    format_vector_markdown,
    write_report,
)
from tctk.utils.script_arguments import VectorScanArguments
from tctk.utils.tile_fetcher import fetch_tile_bytes
from tctk.utils.tile_geometry import tile_range_for_viewport
from tctk.utils.traffic_constants import BatchStatus, ReportFormat
from tctk.utils.vector_color_counter import count_feature_colors, decode_vector_tile

logger = logging.getLogger('scan_vector_tiles')


def read_tile_colors(
    coord: TileCoord,
    url_template: str,
    timeout: float,
    tracker: Optional[PerformanceTracker] = None
) -> VectorTileResult:
    """
    Fetch one vector tile and count its feature colors.

    Args:
        coord: Tile to read.
        url_template: `{z}/{x}/{y}` endpoint template.
        timeout: HTTP timeout in seconds.
        tracker: Optional timer collection.

    Returns:
        VectorTileResult with colors, or with the fetch/decode error.
    """
    tracker = tracker or PerformanceTracker()
    url = coord.format_url(url_template)
    try:
        tracker.start('fetch')
        try:
            payload = fetch_tile_bytes(url, timeout=timeout)
        finally:
            tracker.stop('fetch')

        tracker.start('decode')
        try:
            tile = decode_vector_tile(payload)
            colors = count_feature_colors(tile)
        finally:
            tracker.stop('decode')
    except TrafficColorError as e:
        logger.warning(f"Tile {coord.tile_id}: {e}")
        return VectorTileResult(tile_id=coord.tile_id, url=url, error=str(e))

    logger.debug(f"Tile {coord.tile_id}: {len(colors)} distinct color value(s)")
    return VectorTileResult(tile_id=coord.tile_id, url=url, colors=colors)


def scan_vector_tiles(args: VectorScanArguments) -> Tuple[Dict[str, Any], BatchStatus]:
    """
    Scan every tile covering the map view for traffic colors.

    Returns:
        Tuple of (summary dict, batch status). The summary has the keys
        tileZoom, tileCount, endpoint and tilesWithTrafficColors.
    """
    logger.info("=== scan_vector_tiles started ===")
    logger.debug(f"Arguments: {args}")
    tracker = PerformanceTracker()

    tile_range = tile_range_for_viewport(args.view, args.viewport, args.tile_size)
    tiles = list(tile_range.tiles(args.tile_zoom))
    logger.info(f"Scanning {len(tiles)} tile(s) at zoom {args.tile_zoom}: "
                f"x {tile_range.min_x}..{tile_range.max_x}, y {tile_range.min_y}..{tile_range.max_y}")

    results = [read_tile_colors(coord, args.url_template, args.timeout, tracker) for coord in tiles]

    summary = build_vector_summary(args.tile_zoom, len(tiles), args.url_template, results)
    status = assess_batch(results)

    failed = sum(1 for r in results if not r.succeeded)
    colored = sum(1 for r in results if r.has_colors)
    logger.info(f"Tiles: {len(results)} scanned, {failed} failed, {colored} with traffic colors")
    logger.info(describe_status(status))
    tracker.log_summary()

    if args.report_format == ReportFormat.MARKDOWN.value:
        content = format_vector_markdown(summary, status)
    else:
        content = format_json(summary)
    write_report(content, args.output_path)

    return summary, status
