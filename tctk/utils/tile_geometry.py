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
Tile Geometry and Addressing Helpers.

This module projects geographic coordinates to Web Mercator pixel space to
find the tiles covering a viewport, and provides the small helpers used to
address tiles: URL template substitution and `z/x/y` parsing from a tile's
source path or URL.
"""

import math
import re
from typing import Optional, Tuple
from urllib.parse import parse_qs, urlparse

from tctk.utils.data_models import MapView, TileCoord, TileRange, Viewport
from tctk.utils.exceptions import GeometryDomainError
from tctk.utils.traffic_constants import MAX_SOURCE_LENGTH

TILE_PATH_PATTERN = re.compile(r'/(\d+)/(\d+)/(\d+)(?:\.\w+)?$')


def lon_lat_to_pixel(lon: float, lat: float, zoom: float, tile_size: int) -> Tuple[float, float]:
    """
    Project a longitude/latitude to global pixel coordinates (spherical Web Mercator).

    Latitude is not validated. At exactly +/-90 degrees the projection is
    undefined and GeometryDomainError is raised.

    Args:
        lon: Longitude in degrees.
        lat: Latitude in degrees.
        zoom: Zoom level, may be fractional.
        tile_size: Tile edge in pixels.

    Returns:
        Tuple of (x, y) pixel coordinates at the given zoom.
    """
    scale = 2 ** zoom
    x = (lon + 180) / 360 * tile_size * scale
    sin_lat = math.sin(lat * math.pi / 180)
    try:
        y = (0.5 - math.log((1 + sin_lat) / (1 - sin_lat)) / (4 * math.pi)) * tile_size * scale
    except (ValueError, ZeroDivisionError) as e:
        raise GeometryDomainError(f"Latitude {lat} cannot be projected to Web Mercator: {e}") from e
    return x, y


def tile_range_for_viewport(view: MapView, viewport: Viewport, tile_size: int) -> TileRange:
    """
    Compute the inclusive tile index range covering a viewport.

    Args:
        view: Map center and (possibly fractional) display zoom.
        viewport: Viewport size in pixels.
        tile_size: Tile edge in pixels.

    Returns:
        TileRange of column/row indices.
    """
    center_x, center_y = lon_lat_to_pixel(view.lon, view.lat, view.zoom, tile_size)
    half_width = viewport.width / 2
    half_height = viewport.height / 2

    return TileRange(
        min_x=math.floor((center_x - half_width) / tile_size),
        max_x=math.floor((center_x + half_width) / tile_size),
        min_y=math.floor((center_y - half_height) / tile_size),
        max_y=math.floor((center_y + half_height) / tile_size),
    )


def format_tile_url(template: str, z: int, x: int, y: int) -> str:
    """Substitute tile coordinates into a `{z}/{x}/{y}` URL template."""
    return TileCoord(z, x, y).format_url(template)


def tile_id_from_source(src: Optional[str], fallback: str) -> str:
    """
    Derive a `z/x/y` tile id from a tile's path or URL.

    The path is matched first (`.../z/x/y` with an optional extension), then
    `z`, `x` and `y` query parameters.

    Args:
        src: File path or URL of the tile, or None.
        fallback: Id to use when no coordinates can be found.

    Returns:
        The tile id string.
    """
    if not src:
        return fallback
    try:
        parsed = urlparse(src.replace('\\', '/'))
    except ValueError:
        return fallback

    match = TILE_PATH_PATTERN.search(parsed.path)
    if match:
        return f"{match.group(1)}/{match.group(2)}/{match.group(3)}"

    params = parse_qs(parsed.query)
    z, x, y = (params.get(k, [None])[0] for k in ('z', 'x', 'y'))
    if z and x and y:
        return f"{z}/{x}/{y}"
    return fallback


def trim_source(src: Optional[str]) -> Optional[str]:
    """Shorten long tile sources for reporting."""
    if not src:
        return None
    if len(src) > MAX_SOURCE_LENGTH:
        return f"{src[:MAX_SOURCE_LENGTH - 3]}..."
    return src
