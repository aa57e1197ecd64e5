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
Raster Tile Traffic Color Scan for TCTK.

This module powers the 'raster' command. It classifies the traffic colors
visible in rendered raster tiles, read either from image files on disk (a
tile cache or tiles saved from a map viewer) or fetched from a raster tile
endpoint for the configured map view.

Every tile yields a summary. Tiles that cannot be fetched or decoded carry an
error instead of colors and never stop the scan.
"""
import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

from tctk.utils.data_models import PixelBuffer, TileColorSummary
from tctk.utils.exceptions import EmptyImageError, TrafficColorError
from tctk.utils.path_helpers import find_tile_images
from tctk.utils.performance_tracker import PerformanceTracker
from tctk.utils.pixel_classifier import EMPTY_IMAGE_ERROR, classify_pixels
from tctk.utils.report_formatters import (
    assess_batch,
    colors_found,
    describe_status,
    format_json,
    format_raster_markdown,
    write_report,
)
from tctk.utils.script_arguments import RasterScanArguments
from tctk.utils.tile_fetcher import fetch_tile_bytes
from tctk.utils.tile_geometry import tile_id_from_source, tile_range_for_viewport, trim_source
from tctk.utils.tile_reader import read_pixel_buffer
from tctk.utils.traffic_constants import BatchStatus, ReportFormat

logger = logging.getLogger('scan_raster_tiles')


def _failed(tile_id: str, src: Optional[str], error: Exception) -> TileColorSummary:
    message = EMPTY_IMAGE_ERROR if isinstance(error, EmptyImageError) else str(error)
    logger.warning(f"Tile {tile_id}: {message}")
    return TileColorSummary(tile_id=tile_id, error=message, src=trim_source(src))


def classify_buffer(
    buffer: PixelBuffer,
    tile_id: str,
    src: Optional[str] = None,
    tracker: Optional[PerformanceTracker] = None
) -> TileColorSummary:
    """Classify a decoded tile, recording failures on the summary."""
    tracker = tracker or PerformanceTracker()
    tracker.start('classify')
    try:
        summary = classify_pixels(buffer, tile_id=tile_id)
    except TrafficColorError as e:
        return _failed(tile_id, src, e)
    finally:
        tracker.stop('classify')
    summary.src = trim_source(src)
    return summary


def analyze_raster_tile(
    source: Union[str, Path, bytes],
    tile_id: str,
    src: Optional[str] = None,
    min_tile_size: int = 0,
    tracker: Optional[PerformanceTracker] = None
) -> Optional[TileColorSummary]:
    """
    Decode and classify one raster tile.

    Args:
        source: Image path or raw image bytes.
        tile_id: Key recorded on the summary.
        src: Source path/URL recorded on the summary.
        min_tile_size: Tiles narrower or shorter than this are skipped.
        tracker: Optional timer collection.

    Returns:
        TileColorSummary, with `error` set when the tile could not be analyzed,
        or None when the tile is below the minimum size.
    """
    tracker = tracker or PerformanceTracker()
    tracker.start('decode')
    try:
        buffer = read_pixel_buffer(source)
    except TrafficColorError as e:
        return _failed(tile_id, src, e)
    finally:
        tracker.stop('decode')

    if buffer.width < min_tile_size or buffer.height < min_tile_size:
        logger.debug(f"Skipping {src or tile_id}: {buffer.width}x{buffer.height} is below {min_tile_size} px")
        return None
    return classify_buffer(buffer, tile_id, src, tracker)


def scan_tile_files(
    input_path: Path,
    min_tile_size: int,
    tracker: Optional[PerformanceTracker] = None
) -> List[TileColorSummary]:
    """
    Classify every tile image found under a file or directory.

    Images narrower or shorter than `min_tile_size` are skipped. Tiles whose
    path does not end in `z/x/y` get an id like '<folder>-tile-<index>'.
    """
    tracker = tracker or PerformanceTracker()
    label = input_path.name if input_path.is_dir() else input_path.parent.name
    summaries: List[TileColorSummary] = []

    for file_path in find_tile_images(input_path):
        src = file_path.as_posix()
        tile_id = tile_id_from_source(src, f"{label}-tile-{len(summaries)}")

        summary = analyze_raster_tile(file_path, tile_id, src, min_tile_size, tracker)
        if summary is not None:
            summaries.append(summary)
    return summaries


def scan_tile_endpoint(
    args: RasterScanArguments,
    tracker: Optional[PerformanceTracker] = None
) -> List[TileColorSummary]:
    """Fetch and classify every raster tile covering the map view, skipping tiles below `min_tile_size`."""
    tracker = tracker or PerformanceTracker()
    tile_range = tile_range_for_viewport(args.view, args.viewport, args.tile_size)
    logger.info(f"Fetching {tile_range.tile_count} raster tile(s) at zoom {args.tile_zoom}")

    summaries: List[TileColorSummary] = []
    for coord in tile_range.tiles(args.tile_zoom):
        url = coord.format_url(args.url_template)
        tracker.start('fetch')
        try:
            payload = fetch_tile_bytes(url, timeout=args.timeout)
        except TrafficColorError as e:
            summaries.append(_failed(coord.tile_id, url, e))
            continue
        finally:
            tracker.stop('fetch')
        summary = analyze_raster_tile(payload, coord.tile_id, url, args.min_tile_size, tracker)
        if summary is not None:
            summaries.append(summary)
    return summaries


def scan_raster_tiles(args: RasterScanArguments) -> Tuple[List[TileColorSummary], BatchStatus]:
    """
    Run the raster scan and write its report.

    Returns:
        Tuple of (per-tile summaries, batch status).
    """
    logger.info("=== scan_raster_tiles started ===")
    logger.debug(f"Arguments: {args}")
    tracker = PerformanceTracker()

    if args.input_path is not None:
        summaries = scan_tile_files(args.input_path, args.min_tile_size, tracker)
    else:
        summaries = scan_tile_endpoint(args, tracker)

    status = assess_batch(summaries)
    with_data = [s for s in summaries if s.succeeded]
    with_colors = [s for s in with_data if s.has_colors]
    logger.info(f"Tiles: {len(summaries)} found, {len(with_data)} analyzed, {len(with_colors)} with traffic colors")
    if with_colors:
        logger.info(f"Colors found: {', '.join(colors_found(with_colors))}")
    logger.info(describe_status(status))
    tracker.log_summary()

    if args.report_format == ReportFormat.MARKDOWN.value:
        content = format_raster_markdown(summaries, status)
    else:
        content = format_json([s.to_dict() for s in summaries])
    write_report(content, args.output_path)

    return summaries, status
