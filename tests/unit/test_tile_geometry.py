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
Unit tests for Web Mercator projection, tile ranges and tile addressing.
"""

import math

import pytest

from tctk.utils.data_models import MapView, TileRange, Viewport
from tctk.utils.exceptions import GeometryDomainError
from tctk.utils.tile_geometry import (
    format_tile_url,
    lon_lat_to_pixel,
    tile_id_from_source,
    tile_range_for_viewport,
    trim_source,
)


@pytest.mark.unit
class TestLonLatToPixel:
    """Test the spherical Web Mercator projection."""

    def test_origin_at_zoom_zero(self):
        assert lon_lat_to_pixel(0, 0, 0, 256) == (128, 128)

    def test_scales_with_zoom(self):
        assert lon_lat_to_pixel(0, 0, 2, 256) == (512, 512)

    def test_fractional_zoom(self):
        x, y = lon_lat_to_pixel(0, 0, 0.5, 256)
        assert x == pytest.approx(128 * math.sqrt(2))
        assert y == pytest.approx(128 * math.sqrt(2))

    def test_antimeridian_and_tile_size(self):
        x, _ = lon_lat_to_pixel(180, 0, 0, 512)
        assert x == 512
        x, _ = lon_lat_to_pixel(-180, 0, 0, 512)
        assert x == 0

    def test_northern_latitude_is_above_center(self):
        _, y = lon_lat_to_pixel(0, 60, 0, 256)
        assert 0 < y < 128

    @pytest.mark.parametrize("lat", [90, -90])
    def test_poles_raise_domain_error(self, lat):
        with pytest.raises(GeometryDomainError):
            lon_lat_to_pixel(0, lat, 3, 256)

    def test_domain_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            lon_lat_to_pixel(0, 90, 0, 256)


@pytest.mark.unit
class TestTileRangeForViewport:
    """Test the tiles covering a viewport."""

    def test_zoom_zero_full_world_viewport(self):
        """The right and bottom edges land exactly on a boundary, so the range includes index 1."""
        tile_range = tile_range_for_viewport(MapView(0, 0, 0), Viewport(256, 256), 256)
        assert tile_range == TileRange(min_x=0, max_x=1, min_y=0, max_y=1)

    def test_small_viewport_at_zoom_one(self, small_view):
        view, viewport = small_view
        tile_range = tile_range_for_viewport(view, viewport, 256)
        assert tile_range.to_dict() == {'minX': 0, 'maxX': 1, 'minY': 0, 'maxY': 1}
        assert tile_range.tile_count == 4

    def test_viewport_inside_one_column(self):
        tile_range = tile_range_for_viewport(MapView(lat=0, lon=90, zoom=1), Viewport(10, 10), 256)
        assert (tile_range.min_x, tile_range.max_x) == (1, 1)
        assert (tile_range.min_y, tile_range.max_y) == (0, 1)

    def test_default_target(self):
        """Paris at zoom 9.04 with 512 px tiles and a 1280x720 viewport."""
        view = MapView(lat=48.8581, lon=2.3727, zoom=9.04)
        tile_range = tile_range_for_viewport(view, Viewport(1280, 720), 512)
        center_x, center_y = lon_lat_to_pixel(view.lon, view.lat, view.zoom, 512)
        assert tile_range.min_x == math.floor((center_x - 640) / 512)
        assert tile_range.max_y == math.floor((center_y + 360) / 512)
        assert tile_range.width in (3, 4)
        assert tile_range.height in (2, 3)

    def test_range_grows_with_viewport(self):
        view = MapView(lat=48.8581, lon=2.3727, zoom=9.04)
        widths = [tile_range_for_viewport(view, Viewport(w, 720), 512).width for w in (100, 500, 1000, 2000, 4000)]
        assert widths == sorted(widths)
        assert all(w >= 1 for w in widths)

    def test_pole_raises(self):
        with pytest.raises(GeometryDomainError):
            tile_range_for_viewport(MapView(lat=-90, lon=0, zoom=2), Viewport(100, 100), 256)


@pytest.mark.unit
class TestTileAddressing:
    """Test URL templates and tile id parsing."""

    def test_format_tile_url(self):
        url = format_tile_url("https://tiles.test/traffic/{z}/{x}/{y}.pbf?key=abc", 9, 259, 176)
        assert url == "https://tiles.test/traffic/9/259/176.pbf?key=abc"

    @pytest.mark.parametrize("src", [
        "https://tiles.test/traffic/9/259/176.png?key=abc",
        "https://tiles.test/traffic/9/259/176",
        "/tmp/tiles/9/259/176.png",
        "C:\\tiles\\9\\259\\176.png",
        "https://tiles.test/render?z=9&x=259&y=176",
    ])
    def test_tile_id_from_source(self, src):
        assert tile_id_from_source(src, 'fallback') == '9/259/176'

    @pytest.mark.parametrize("src", [None, "", "https://tiles.test/tile.png", "/tmp/tiles/176.png",
                                     "https://tiles.test/render?z=9&x=259"])
    def test_tile_id_fallback(self, src):
        assert tile_id_from_source(src, 'tiles-tile-3') == 'tiles-tile-3'

    def test_trim_source(self):
        long_src = "https://tiles.test/" + "a" * 300
        trimmed = trim_source(long_src)
        assert len(trimmed) == 180
        assert trimmed.endswith("...")
        assert trimmed.startswith("https://tiles.test/")

    def test_trim_source_keeps_short_sources(self):
        src = "b" * 180
        assert trim_source(src) == src
        assert trim_source(None) is None
        assert trim_source("") is None
