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
Report Assessment and Formatting for Tile Scans.

This module turns per-tile results into the reports written by the scanning
tools: JSON summaries for machines and Markdown tables for people. It also
assesses a batch as a whole, keeping "no tile could be analyzed" apart from
"tiles were analyzed but carry no traffic colors".
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from tctk.utils.colors import get_bucket_color_map
from tctk.utils.data_models import TileColorSummary, VectorTileResult
from tctk.utils.traffic_constants import BatchStatus

logger = logging.getLogger(__name__)

STATUS_MESSAGES = {
    BatchStatus.NO_TILES: "No tiles were found to analyze.",
    BatchStatus.NO_DATA: "No tile could be analyzed: the layer does not appear to be rendering.",
    BatchStatus.NO_COLORS: "Tiles were analyzed but none carries traffic colors at this location.",
    BatchStatus.COLORS_FOUND: "Traffic colors were found.",
}

Result = Union[TileColorSummary, VectorTileResult]


def assess_batch(results: Sequence[Result]) -> BatchStatus:
    """
    Classify the outcome of a batch of tile results.

    Args:
        results: Per-tile results, each exposing `succeeded` and `has_colors`.

    Returns:
        BatchStatus for the whole batch.
    """
    if not results:
        return BatchStatus.NO_TILES
    succeeded = [r for r in results if r.succeeded]
    if not succeeded:
        return BatchStatus.NO_DATA
    if not any(r.has_colors for r in succeeded):
        return BatchStatus.NO_COLORS
    return BatchStatus.COLORS_FOUND


def describe_status(status: BatchStatus) -> str:
    return STATUS_MESSAGES[status]


def colors_found(summaries: Iterable[TileColorSummary]) -> List[str]:
    """Distinct bucket names across all successfully analyzed tiles, in first-seen order."""
    found: Dict[str, None] = {}
    for summary in summaries:
        if summary.succeeded:
            for color in summary.colors:
                found.setdefault(color, None)
    return list(found)


def build_vector_summary(
    tile_zoom: int,
    tile_count: int,
    endpoint: str,
    results: Sequence[VectorTileResult]
) -> Dict[str, Any]:
    """
    Build the vector scan summary.

    Only tiles that failed or carry at least one color are listed.
    """
    return {
        'tileZoom': tile_zoom,
        'tileCount': tile_count,
        'endpoint': endpoint,
        'tilesWithTrafficColors': [r.to_dict() for r in results if r.error is not None or r.colors],
    }


def format_json(data: Any) -> str:
    return json.dumps(data, indent=2)


def _escape_cell(value: Any) -> str:
    return str(value).replace('|', '\\|').replace('\n', ' ')


def _render_header(title: str, status: BatchStatus) -> List[str]:
    return [
        f"# {title}",
        "",
        f"**Report Date:** {datetime.now().strftime('%Y-%m-%d %H:%M')}  ",
        f"**Status:** `{status.value}`: {describe_status(status)}",
        "",
    ]


def format_raster_markdown(summaries: Sequence[TileColorSummary], status: BatchStatus) -> str:
    """Render raster tile summaries as a Markdown report."""
    swatches = get_bucket_color_map()
    lines = _render_header("Raster Traffic Color Report", status)
    found = colors_found(summaries)
    if found:
        legend = ", ".join(f"{name} (`{swatches.get(name, '')}`)" for name in found)
        lines += [f"**Colors Found:** {legend}", ""]

    lines += [
        "| Tile | Colors | Samples | Counts | Error |",
        "|---|---|---:|---|---|",
    ]
    for s in summaries:
        counts = ", ".join(f"{k}: {v}" for k, v in s.color_counts.items() if v)
        lines.append(
            f"| {_escape_cell(s.tile_id)} | {_escape_cell(', '.join(s.colors) or '-')} | {s.sample_count} "
            f"| {_escape_cell(counts or '-')} | {_escape_cell(s.error or '')} |"
        )
    return "\n".join(lines) + "\n"


def format_vector_markdown(summary: Dict[str, Any], status: BatchStatus) -> str:
    """Render a vector scan summary as a Markdown report."""
    lines = _render_header("Vector Traffic Color Report", status)
    lines += [
        f"**Endpoint:** `{summary['endpoint']}`  ",
        f"**Tile Zoom:** {summary['tileZoom']}  ",
        f"**Tiles Scanned:** {summary['tileCount']}",
        "",
        "| Tile | Color Value | Hex | Count | Error |",
        "|---|---|---|---:|---|",
    ]
    for tile in summary['tilesWithTrafficColors']:
        tile_id = _escape_cell(tile['tileId'])
        if 'error' in tile:
            lines.append(f"| {tile_id} | - | - | - | {_escape_cell(tile['error'])} |")
            continue
        for color in tile['colors']:
            lines.append(f"| {tile_id} | {_escape_cell(color['value'])} | {color['hex'] or '-'} | {color['count']} | |")
    return "\n".join(lines) + "\n"


def write_report(content: str, output_path: Optional[Path] = None) -> Optional[Path]:
    """
    Write a report to a file, or to stdout when no path is given.

    Returns:
        The path written, or None for stdout.
    """
    if output_path is None:
        sys.stdout.write(content)
        if not content.endswith("\n"):
            sys.stdout.write("\n")
        sys.stdout.flush()
        return None

    output_path = Path(output_path)
    if output_path.parent and not output_path.parent.exists():
        output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(content)
    logger.info(f"Report saved to: {output_path}")
    return output_path
